from __future__ import annotations

import csv
import io

from flask import Flask, request

from ..common import datetime_utils
from ..common.http import api_errors, ok
from ..container import Container
from ..core.constants import DEFAULT_CSV_ENCODING

_CSV_FIELDS = [
    "date",
    "patient_id",
    "patient_name",
    "status",
    "activity_name",
    "therapist_name",
    "start_time",
    "end_time",
]


def _requested_day(param: str):
    raw = request.args.get(param)
    if raw:
        return datetime_utils.parse_iso_date(raw)
    return datetime_utils.today_local()


def register(app: Flask, container: Container) -> None:
    svc = container.transport_service

    @app.route("/api/transport", methods=["GET"], endpoint="transport_list")
    @api_errors("Erro ao buscar lista de transporte")
    def transport_list():
        return ok(svc.resolve_transport_list(_requested_day("date")))

    @app.route("/api/transport/weekly", methods=["GET"], endpoint="transport_weekly")
    @api_errors("Erro ao buscar agenda semanal de transporte")
    def transport_weekly():
        return ok(svc.resolve_weekly_schedule(_requested_day("startDate")))

    @app.route("/api/stats/transport", methods=["GET"], endpoint="transport_stats")
    @api_errors("Erro ao buscar estatísticas de transporte")
    def transport_stats():
        return ok(svc.compute_stats(_requested_day("date")))

    @app.route("/api/transport.csv", methods=["GET"], endpoint="transport_csv")
    @api_errors("Erro ao exportar lista de transporte")
    def transport_csv():
        """Daily list, one row per activity (a patient with two activities gets two rows)."""

        day = _requested_day("date")
        items = svc.resolve_transport_list(day)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=_CSV_FIELDS)
        writer.writeheader()
        for item in items:
            status = "Ausente" if item.is_absent else "Confirmado"
            for activity in item.activities:
                writer.writerow(
                    {
                        "date": day.strftime("%Y-%m-%d"),
                        "patient_id": item.patient_id,
                        "patient_name": item.patient_name,
                        "status": status,
                        "activity_name": activity.activity_name,
                        "therapist_name": activity.therapist_name,
                        "start_time": activity.start_time.strftime("%H:%M"),
                        "end_time": activity.end_time.strftime("%H:%M"),
                    }
                )

        encoding = app.config.get("CSV_ENCODING") or DEFAULT_CSV_ENCODING
        filename = f"transporte_{day.strftime('%Y-%m-%d')}.csv"
        return app.response_class(
            out.getvalue().encode(encoding),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
