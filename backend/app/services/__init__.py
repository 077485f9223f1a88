"""Services Layer: one module per resource kind, composed on the ownership resolver.

Invariants:
    - Services never build HTTP responses; they return rows or raise AppError
    - Owner ids are resolved on every call, never cached

Design Decisions:
    - Module-level async functions taking a RowStore: no instance state to manage
      (ADR: services are namespaces, not objects)
"""
