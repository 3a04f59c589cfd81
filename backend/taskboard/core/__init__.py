"""Core Layer — entity graph, access guard, position rules. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, infrastructure/, models/, or db/
    - All functions are pure and deterministic (assertions raise, never write)

Design Decisions:
    - Functional core separated from imperative shell: services/ orchestrate
      the store around the pure rules defined here
"""
