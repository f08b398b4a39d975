SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

REPORT_WINDOW_DAYS = 30

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

STUDENTS = [
    {
        "id": "S1",
        "name": "John A. Doe",
        "first_name": "John",
        "last_name": "Doe",
        "middle_initial": "A",
        "email": "john.doe@example.com",
    },
    {"id": "S2", "name": "Jane Roe"},
]
