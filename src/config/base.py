"""Settings shared by every environment; each one overrides what differs."""

import os

from hr_system.core.constants import DEFAULT_TAX_BRACKETS, DEFAULT_TIMEZONE, LEAVE_DAYS_PER_YEAR, SGK_RATE

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_db"),
}

# Regional calendar used to turn instants into leave dates
TIMEZONE = os.getenv("TIMEZONE", DEFAULT_TIMEZONE)

# Fiscal rules; brackets are lower_bound:rate pairs in ascending order
SGK_RATE = os.getenv("SGK_RATE", str(SGK_RATE))
TAX_BRACKETS = os.getenv("TAX_BRACKETS", DEFAULT_TAX_BRACKETS)
LEAVE_DAYS_PER_YEAR = int(os.getenv("LEAVE_DAYS_PER_YEAR", str(LEAVE_DAYS_PER_YEAR)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
JSON_LOGS = bool(int(os.getenv("JSON_LOGS", "0")))
