import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "intern_portal_test"),
}

STORE_BACKEND = "memory"
DIRECTORY_BACKEND = "json"
ROSTER_PATH = os.getenv("ROSTER_PATH", "instance/roster.json")
DIRECTORY_TTL_SECONDS = 0
DEFAULT_DURATION_SECONDS = 30

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
