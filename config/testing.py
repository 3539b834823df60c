import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "password"),
    "database": os.getenv("DB_NAME", "attentrack_test"),
    "connection_limit": 2,
    "connect_timeout": 2,
}

TESTING = True

RELATIONAL_ENABLED = bool(int(os.getenv("RELATIONAL_ENABLED", "0")))
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", "")
STRICT_STORAGE = False
SEED_ON_EMPTY = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
