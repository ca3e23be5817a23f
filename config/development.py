import os

from config.config import Config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()

STORE_BACKEND = Config.STORE_BACKEND
STORE_DIR = Config.STORE_DIR
DIRECTORY_BACKEND = Config.DIRECTORY_BACKEND
ROSTER_PATH = Config.ROSTER_PATH
DIRECTORY_TTL_SECONDS = Config.DIRECTORY_TTL_SECONDS
DEFAULT_DURATION_SECONDS = Config.DEFAULT_DURATION_SECONDS

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# Applies database/schema.sql on startup when a MySQL backend is configured
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
