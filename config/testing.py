import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "campus_od_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

# Tests run against the in-memory repositories
STORAGE_BACKEND = "memory"
TOKEN_MAX_AGE = 3600

AUTO_INIT_DB = False
AUTO_SEED_DB = False
