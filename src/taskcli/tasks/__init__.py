"""
Task subsystem.

Components:
- task_models.py: the Task record
- task_errors.py: error taxonomy (read/parse/write/validation/not-found)
- task_store.py: JSON file load + atomic save
- task_api.py: add/list/done/remove on the in-memory list
"""
