"""
Task subsystem.

Components:
- task_models.py: the Task record and its JSON record codec
- persistence.py: key-value blob backends (SQLite table, files)
- task_store.py: in-memory collection + snapshot persistence + change notifications
- task_api.py: small high-level helpers used by the console
"""
