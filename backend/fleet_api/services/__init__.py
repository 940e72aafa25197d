"""Services Layer — multi-step operations that orchestrate the DocumentStore.

Invariants:
    - Services receive their DocumentStore by injection, never import a global
    - Pure decisions delegated to core/; services only sequence the IO around them
"""
