import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# json | memory | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
STORE_PATH = os.getenv("STORE_PATH", "data/attendance")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "class_attendance"),
}

# If enabled with the mysql backend, tables are created on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

REPORT_WINDOW_DAYS = int(os.getenv("REPORT_WINDOW_DAYS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# Demo roster
STUDENTS = [
    {
        "id": "student-123",
        "name": "John A. Doe",
        "first_name": "John",
        "last_name": "Doe",
        "middle_initial": "A",
        "email": "john.doe@example.com",
    },
]
