"""Infrastructure Layer — database, token verification and logging.

Invariants:
    - Infrastructure implements the Protocols in core/repository_protocols.py
    - Driver exceptions are mapped to core/errors.py types before leaving this layer
"""
