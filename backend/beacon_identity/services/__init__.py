"""Services Layer — orchestration of core rules over injected repositories.

Invariants:
    - Services depend on core Protocols only, never on concrete stores
"""
