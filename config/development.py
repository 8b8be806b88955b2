import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timesheet_db"),
}

DEBUG = True

# "Remember me" sessions
SESSION_LIFETIME_DAYS = int(os.getenv("SESSION_LIFETIME_DAYS", "7"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also create one demo account per role
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Payroll
DEFAULT_HOURLY_WAGE = int(os.getenv("DEFAULT_HOURLY_WAGE", "10000"))
# "preserve" keeps a negative net pay, "clamp" floors it at 0
NET_PAY_POLICY = os.getenv("NET_PAY_POLICY", "preserve")
