import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "wash_payroll"),
}

# Calendar days of wash activity are counted in this timezone.
BUSINESS_TIMEZONE = os.getenv("BUSINESS_TIMEZONE", "Asia/Dubai")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo workers and default salary settings on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
