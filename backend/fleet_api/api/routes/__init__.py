"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Association and paging logic lives in services/, never in a route

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
