import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_ledger_test"),
}

GEMINI_API_KEY = ""
GEMINI_MODEL = "gemini-2.5-flash"
OCR_TIMEOUT_SECONDS = 5.0

MASTER_PASSWORD_HASH = os.getenv("MASTER_PASSWORD_HASH", "")

PRESENT_THRESHOLD = 90
REPORT_SIGNATURE = "ADY ADMIN"
TIMEZONE = "Asia/Kolkata"

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
