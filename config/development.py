import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Identity allowed to create events and register participants.
ADMIN_IDENTITY = os.getenv("ADMIN_IDENTITY", "0x00000000000000000000000000000000000000ad")

# "memory" keeps everything in-process; "mysql" persists to DB_CONFIG.
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_registry"),
}

# Header set by the gateway in front of the app with the authenticated caller.
CALLER_HEADER = os.getenv("CALLER_HEADER", "X-Caller-Identity")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled (mysql backend), app applies schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
