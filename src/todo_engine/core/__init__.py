"""
Core wiring.

Components:
- ports.py: RecordRepo protocol the record operations depend on
- state.py: AppState + create_initial_state (composition root)
"""
