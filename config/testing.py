import os
import tempfile

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "medattend_test"),
}

PERSISTENCE_BACKEND = "file"
LOCAL_CACHE_DIR = os.getenv("LOCAL_CACHE_DIR", os.path.join(tempfile.gettempdir(), "medattend_test_cache"))
SAVE_DEBOUNCE_SECONDS = 0.05

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
