from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, json_body, ok, pick_fields
from ..container import Container

_BODY_FIELDS = {"name": "name", "phone": "phone", "address": "address", "active": "active"}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/patients", methods=["GET"], endpoint="patients_list")
    @api_errors("Erro ao buscar pacientes")
    def patients_list():
        return ok(container.patient_service.list_patients())

    @app.route("/api/patients/<int:patient_id>", methods=["GET"], endpoint="patients_get")
    @api_errors("Erro ao buscar paciente")
    def patients_get(patient_id: int):
        return ok(container.patient_service.get_patient(patient_id))

    @app.route("/api/patients", methods=["POST"], endpoint="patients_create")
    @api_errors("Erro ao criar paciente")
    def patients_create():
        fields = pick_fields(json_body(), _BODY_FIELDS)
        return ok(container.patient_service.create_patient(**fields), 201)

    @app.route("/api/patients/<int:patient_id>", methods=["PATCH"], endpoint="patients_update")
    @api_errors("Erro ao atualizar paciente")
    def patients_update(patient_id: int):
        changes = pick_fields(json_body(), _BODY_FIELDS)
        return ok(container.patient_service.update_patient(patient_id, changes=changes))

    @app.route("/api/patients/<int:patient_id>/activities", methods=["GET"], endpoint="patients_activities")
    @api_errors("Erro ao buscar atividades do paciente")
    def patients_activities(patient_id: int):
        container.patient_service.get_patient(patient_id)
        return ok(container.patient_service.list_patient_activities(patient_id))
