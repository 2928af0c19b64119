import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

ADMIN_IDENTITY = os.getenv("ADMIN_IDENTITY", "")

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_registry"),
}

CALLER_HEADER = os.getenv("CALLER_HEADER", "X-Caller-Identity")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
