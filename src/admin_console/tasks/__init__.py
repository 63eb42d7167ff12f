"""
Task subsystem.

Components:
- codec.py: Todo text <-> Task conversion (parse, render, completion toggle, time check)
- task_store.py: buffer files, JSON task mirror, save debouncer
"""
