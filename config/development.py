import os

# Defaults match a stock local MySQL install; override through the environment or .env.
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "password"),
    "database": os.getenv("DB_NAME", "attentrack"),
    "connection_limit": int(os.getenv("DB_CONNECTION_LIMIT", "10")),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

RELATIONAL_ENABLED = bool(int(os.getenv("RELATIONAL_ENABLED", "1")))

# Empty string keeps the fallback store in memory only.
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", ".attentrack/local_store.json")

STRICT_STORAGE = bool(int(os.getenv("STRICT_STORAGE", "0")))

# Fill an empty student table with the sample roll on first start.
SEED_ON_EMPTY = bool(int(os.getenv("SEED_ON_EMPTY", "1")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
