import json
import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
STORE_PATH = os.getenv("STORE_PATH", "/var/lib/class-attendance")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

REPORT_WINDOW_DAYS = int(os.getenv("REPORT_WINDOW_DAYS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

# Roster as a JSON list of {"id", "name", "first_name", "last_name", "middle_initial", "email"}
STUDENTS = json.loads(os.getenv("STUDENTS_JSON", "[]"))
