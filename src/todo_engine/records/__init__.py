"""
Todo record subsystem.

Components:
- record_models.py: data structures (TodoRecord, ProposedEdit, RecurrenceRule, Link, StoreKey)
- record_dates.py: "HH:MM:SS DD-mon-YYYY" date codec (DateSpec)
- record_parser.py: text -> records
- record_serializer.py: records -> text
- recurrence.py: next occurrence of a completed recurring task
- record_sorter.py: canonical grouping and order
- reconciler.py: merge a client's edited view into the stored set
- visibility.py: which records a client is shown
- record_store.py: file-backed storage with per-key writer locks
- record_api.py: high-level operations used by the rest of the app
"""
