"""Infrastructure Layer: database access, correlation, logging, rate limiting.

Invariants:
    - Every database failure leaves this layer as a PersistenceError with a taxonomy code
    - Cross-cutting concerns (correlation id, access log, limits) live here, not in routes

Design Decisions:
    - Thin wrappers over SQLAlchemy, slowapi and logging (ADR: ExMA single responsibility)
"""
