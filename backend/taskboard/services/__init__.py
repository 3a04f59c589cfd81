"""Services — aggregate mutators and the membership synchronizer (imperative shell).

Invariants:
    - Every public method runs inside one store.transaction()
    - Guard check first, then invariant checks, then persistence
    - The acting user is always an explicit parameter, never ambient state
"""
