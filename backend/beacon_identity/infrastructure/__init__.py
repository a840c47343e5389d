"""Infrastructure Layer — database, cache, and logging adapters.

Invariants:
    - Infrastructure maps library exceptions (SQLAlchemy, redis) to core errors
    - Nothing here decides identification outcomes; core rules live in core/
"""
