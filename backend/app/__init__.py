"""HealthJobs API package: gateway for the healthcare job marketplace.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
