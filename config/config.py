import os


def _flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY") or "intern-portal-dev-key"

    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = int(os.getenv("DB_PORT", "3306"))
    DB_USER = os.getenv("DB_USER", "root")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")
    DB_NAME = os.getenv("DB_NAME", "intern_portal")

    STORE_BACKEND = os.getenv("STORE_BACKEND", "file")
    STORE_DIR = os.getenv("STORE_DIR", "instance/store")
    DIRECTORY_BACKEND = os.getenv("DIRECTORY_BACKEND", "json")
    ROSTER_PATH = os.getenv("ROSTER_PATH", "instance/roster.json")
    DIRECTORY_TTL_SECONDS = int(os.getenv("DIRECTORY_TTL_SECONDS", "60"))
    DEFAULT_DURATION_SECONDS = int(os.getenv("DEFAULT_DURATION_SECONDS", "30"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    AUTO_INIT_DB = _flag("AUTO_INIT_DB")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
