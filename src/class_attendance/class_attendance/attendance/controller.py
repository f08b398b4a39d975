from __future__ import annotations

import io
import logging
from datetime import date

import qrcode
from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty, require_non_negative_int
from ..container import Container
from ..core.enums import ScanResult
from ..core.exceptions import StoreUnavailableError, StudentNotFoundError, ValidationError
from ..reports.service import export_csv
from ..students.model import Student
from ..tokens.parser import encode_token, issue_token

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _today() -> date:
        # The evaluating date is the server clock; "?today=" is honoured only under TESTING.
        value = request.args.get("today") if app.config.get("TESTING") else None
        if value:
            try:
                return parse_iso_date(value)
            except ValueError:
                raise ValidationError("today must be YYYY-MM-DD") from None
        return date.today()

    def _student(student_id) -> Student:
        student_id = require_non_empty(student_id, "student_id")
        student = container.students.get_by_id(student_id)
        if not student:
            raise StudentNotFoundError(f"Unknown student: {student_id}")
        return student

    def _window_days() -> int:
        value = request.args.get("days")
        if value is None:
            return container.report_window_days
        return require_non_negative_int(value, "days")

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(StudentNotFoundError)
    def handle_student_not_found(e):
        return jsonify({"success": False, "message": str(e)}), 404

    @app.errorhandler(StoreUnavailableError)
    def handle_store_unavailable(e):
        logger.error("Record store unavailable: %s", e)
        return jsonify({"success": False, "message": "Attendance storage is unavailable"}), 503

    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status")
    def attendance_status():
        student = _student(request.args.get("student_id"))
        view = container.marker.current_status(student, _today())
        return jsonify({"success": True, **view.to_dict()})

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    def attendance_scan():
        """Receive a decoded payload from the scanner and try to mark attendance."""
        data = request.get_json(silent=True) or {}
        student = _student(data.get("student_id"))
        payload = data.get("payload")
        if not isinstance(payload, str):
            payload = ""

        outcome = container.marker.submit_scan(payload, student, _today())
        status_code = 503 if outcome.result == ScanResult.STORE_UNAVAILABLE else 200
        return jsonify({"success": outcome.accepted, **outcome.to_dict()}), status_code

    @app.route("/api/attendance/report", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        student = _student(request.args.get("student_id"))
        report = container.reports.build_report(student, _window_days(), _today())
        return jsonify({"success": True, "studentName": student.name, **report.to_dict()})

    @app.route("/api/attendance/report.csv", methods=["GET"], endpoint="attendance_report_csv")
    def attendance_report_csv():
        student = _student(request.args.get("student_id"))
        as_of = _today()
        report = container.reports.build_report(student, _window_days(), as_of)

        filename = f"attendance_{student.student_id}_{as_of.strftime('%Y%m%d')}.csv"
        return app.response_class(
            export_csv(report).encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    # ===== TOKEN / QR ENDPOINTS (instructor side) =====

    @app.route("/api/attendance/token", methods=["GET"], endpoint="attendance_token")
    def attendance_token():
        token = issue_token(_today(), session_id=request.args.get("session_id"))
        return jsonify({"success": True, "token": token.to_dict(), "payload": encode_token(token)})

    @app.route("/api/attendance/token/qr", methods=["GET"], endpoint="attendance_token_qr")
    def attendance_token_qr():
        """Today's token rendered as a PNG QR code for display in class."""
        token = issue_token(_today(), session_id=request.args.get("session_id"))

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(encode_token(token))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format="PNG")
        buf.seek(0)

        return send_file(buf, mimetype="image/png")
