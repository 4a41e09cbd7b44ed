"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or client/
    - All functions are pure and deterministic

Design Decisions:
    - Editor state machine and view projection live here so they are testable
      without a map, a browser or a network
"""
