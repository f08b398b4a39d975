"""Class Attendance package.

Students confirm presence at a class session by scanning a date-scoped token.
The package is organized by feature modules (tokens, records, attendance,
reports) with a thin Flask controller layer over service/repository layers.
"""
