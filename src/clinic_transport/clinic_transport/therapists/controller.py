from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, json_body, ok, pick_fields
from ..container import Container

_BODY_FIELDS = {
    "name": "name",
    "specialty": "specialty",
    "email": "email",
    "phone": "phone",
    "workDays": "work_days",
    "active": "active",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/therapists", methods=["GET"], endpoint="therapists_list")
    @api_errors("Erro ao buscar terapeutas")
    def therapists_list():
        return ok(container.therapist_service.list_therapists())

    @app.route("/api/therapists/<int:therapist_id>", methods=["GET"], endpoint="therapists_get")
    @api_errors("Erro ao buscar terapeuta")
    def therapists_get(therapist_id: int):
        return ok(container.therapist_service.get_therapist(therapist_id))

    @app.route("/api/therapists", methods=["POST"], endpoint="therapists_create")
    @api_errors("Erro ao criar terapeuta")
    def therapists_create():
        fields = pick_fields(json_body(), _BODY_FIELDS)
        return ok(container.therapist_service.create_therapist(**fields), 201)

    @app.route("/api/therapists/<int:therapist_id>", methods=["PATCH"], endpoint="therapists_update")
    @api_errors("Erro ao atualizar terapeuta")
    def therapists_update(therapist_id: int):
        changes = pick_fields(json_body(), _BODY_FIELDS)
        return ok(container.therapist_service.update_therapist(therapist_id, changes=changes))
