import os

from config.config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")
STORE_DIR = Config.STORE_DIR
DIRECTORY_BACKEND = os.getenv("DIRECTORY_BACKEND", "mysql")
ROSTER_PATH = Config.ROSTER_PATH
DIRECTORY_TTL_SECONDS = Config.DIRECTORY_TTL_SECONDS
DEFAULT_DURATION_SECONDS = Config.DEFAULT_DURATION_SECONDS

LOG_LEVEL = Config.LOG_LEVEL
DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
