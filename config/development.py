import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_ledger"),
}

# Name extraction oracle
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
OCR_TIMEOUT_SECONDS = float(os.getenv("OCR_TIMEOUT_SECONDS", "60"))

# werkzeug hash of the confirmation secret for hard deletes and registration,
# e.g. python -c "from werkzeug.security import generate_password_hash as g; print(g('secret'))"
MASTER_PASSWORD_HASH = os.getenv("MASTER_PASSWORD_HASH", "")

PRESENT_THRESHOLD = int(os.getenv("PRESENT_THRESHOLD", "90"))
REPORT_SIGNATURE = os.getenv("REPORT_SIGNATURE", "ADY ADMIN")
TIMEZONE = os.getenv("TIMEZONE", "Asia/Kolkata")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
