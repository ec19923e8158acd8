"""Database schema for the sitestage state file."""

SCHEMA = """
-- Installation-wide key/value settings (recent files, preferences)
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""
