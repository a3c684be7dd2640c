import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "zen_den"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "zen_den"),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))

FREQUENT_VISITOR_DAYS = int(os.getenv("FREQUENT_VISITOR_DAYS", "30"))
FREQUENT_VISITOR_MIN_VISITS = int(os.getenv("FREQUENT_VISITOR_MIN_VISITS", "3"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
