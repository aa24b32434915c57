from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, json_body, no_content, ok, pick_fields
from ..container import Container

_BODY_FIELDS = {
    "patientId": "patient_id",
    "activityId": "activity_id",
    "transportNeeded": "transport_needed",
    "active": "active",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/patient-activities", methods=["GET"], endpoint="enrollments_list")
    @api_errors("Erro ao buscar atividades dos pacientes")
    def enrollments_list():
        return ok(container.enrollment_service.list_enrollments())

    @app.route("/api/patient-activities/<int:patient_activity_id>", methods=["GET"], endpoint="enrollments_get")
    @api_errors("Erro ao buscar atividade do paciente")
    def enrollments_get(patient_activity_id: int):
        return ok(container.enrollment_service.get_enrollment(patient_activity_id))

    @app.route("/api/patient-activities", methods=["POST"], endpoint="enrollments_create")
    @api_errors("Erro ao criar atividade do paciente")
    def enrollments_create():
        fields = pick_fields(json_body(), _BODY_FIELDS)
        return ok(container.enrollment_service.enroll(**fields), 201)

    @app.route("/api/patient-activities/<int:patient_activity_id>", methods=["PATCH"], endpoint="enrollments_update")
    @api_errors("Erro ao atualizar atividade do paciente")
    def enrollments_update(patient_activity_id: int):
        changes = pick_fields(json_body(), _BODY_FIELDS)
        return ok(container.enrollment_service.update_enrollment(patient_activity_id, changes=changes))

    @app.route("/api/patient-activities/<int:patient_activity_id>", methods=["DELETE"], endpoint="enrollments_delete")
    @api_errors("Erro ao excluir atividade do paciente")
    def enrollments_delete(patient_activity_id: int):
        container.enrollment_service.delete_enrollment(patient_activity_id)
        return no_content()
