# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "DAYLIST_APP_NAME": "App display name (default: daylist).",
    "DAYLIST_LOG_LEVEL": "File log level (default: INFO).",
    # Connectors
    "DAYLIST_CONSOLE_ENABLED": "Run the console list view (true/false, default: true).",
    # Storage
    "DAYLIST_STORAGE_BACKEND": "sqlite | file (default: sqlite; unknown values fall back to sqlite).",
    "DAYLIST_STORAGE_KEY": "Key the task snapshot is stored under (default: tasks).",
    # Paths (gitignored)
    "DAYLIST_DATA_DIR": "Local data directory, also holds daylist.log (default: .local/daylist).",
    "DAYLIST_STORE_DB_PATH": "SQLite key-value file (default: <data_dir>/store.sqlite3).",
    "DAYLIST_STORE_DIR": "Directory for the file backend (default: <data_dir>/store).",
}
