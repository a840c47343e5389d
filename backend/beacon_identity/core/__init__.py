"""Core Layer — pure domain logic for beacon identity resolution.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, repositories/ or db/
    - Everything except repository_protocols is synchronous and IO-free
"""
