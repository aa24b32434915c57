from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, json_body, no_content, ok, optional_int_arg, pick_fields
from ..container import Container

_PATIENT_FIELDS = {"patientId": "patient_id", "date": "absence_date", "reason": "reason"}
_THERAPIST_FIELDS = {"therapistId": "therapist_id", "date": "absence_date", "reason": "reason"}


def register(app: Flask, container: Container) -> None:
    svc = container.absence_service

    @app.route("/api/patient-absences", methods=["GET"], endpoint="patient_absences_list")
    @api_errors("Erro ao buscar ausências de pacientes")
    def patient_absences_list():
        return ok(
            svc.list_patient_absences(
                on=request.args.get("date") or None,
                patient_id=optional_int_arg("patientId"),
            )
        )

    @app.route("/api/patient-absences", methods=["POST"], endpoint="patient_absences_create")
    @api_errors("Erro ao registrar ausência de paciente")
    def patient_absences_create():
        fields = pick_fields(json_body(), _PATIENT_FIELDS)
        return ok(svc.register_patient_absence(**fields), 201)

    @app.route("/api/patient-absences/toggle", methods=["POST"], endpoint="patient_absences_toggle")
    @api_errors("Erro ao atualizar ausência de paciente")
    def patient_absences_toggle():
        fields = pick_fields(json_body(), _PATIENT_FIELDS)
        return ok(svc.toggle_patient_absence(**fields))

    @app.route("/api/patient-absences/<int:absence_id>", methods=["DELETE"], endpoint="patient_absences_delete")
    @api_errors("Erro ao excluir ausência de paciente")
    def patient_absences_delete(absence_id: int):
        svc.remove_patient_absence(absence_id)
        return no_content()

    @app.route("/api/therapist-absences", methods=["GET"], endpoint="therapist_absences_list")
    @api_errors("Erro ao buscar ausências de terapeutas")
    def therapist_absences_list():
        return ok(
            svc.list_therapist_absences(
                on=request.args.get("date") or None,
                therapist_id=optional_int_arg("therapistId"),
            )
        )

    @app.route("/api/therapist-absences", methods=["POST"], endpoint="therapist_absences_create")
    @api_errors("Erro ao registrar ausência de terapeuta")
    def therapist_absences_create():
        fields = pick_fields(json_body(), _THERAPIST_FIELDS)
        return ok(svc.register_therapist_absence(**fields), 201)

    @app.route("/api/therapist-absences/<int:absence_id>", methods=["DELETE"], endpoint="therapist_absences_delete")
    @api_errors("Erro ao excluir ausência de terapeuta")
    def therapist_absences_delete(absence_id: int):
        svc.remove_therapist_absence(absence_id)
        return no_content()
