"""Beacon Identity — resolves beacon sightings into customer identities.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
