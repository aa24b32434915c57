from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, json_body, no_content, ok, pick_fields
from ..container import Container

_BODY_FIELDS = {
    "name": "name",
    "therapistId": "therapist_id",
    "dayOfWeek": "day_of_week",
    "startTime": "start_time",
    "endTime": "end_time",
    "notes": "notes",
    "active": "active",
}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/activities", methods=["GET"], endpoint="activities_list")
    @api_errors("Erro ao buscar atividades")
    def activities_list():
        day = request.args.get("dayOfWeek") or None
        return ok(container.activity_service.list_activities(day_of_week=day))

    @app.route("/api/activities/<int:activity_id>", methods=["GET"], endpoint="activities_get")
    @api_errors("Erro ao buscar atividade")
    def activities_get(activity_id: int):
        return ok(container.activity_service.get_activity(activity_id))

    @app.route("/api/activities", methods=["POST"], endpoint="activities_create")
    @api_errors("Erro ao criar atividade")
    def activities_create():
        fields = pick_fields(json_body(), _BODY_FIELDS)
        return ok(container.activity_service.create_activity(**fields), 201)

    @app.route("/api/activities/<int:activity_id>", methods=["PATCH"], endpoint="activities_update")
    @api_errors("Erro ao atualizar atividade")
    def activities_update(activity_id: int):
        changes = pick_fields(json_body(), _BODY_FIELDS)
        return ok(container.activity_service.update_activity(activity_id, changes=changes))

    @app.route("/api/activities/<int:activity_id>", methods=["DELETE"], endpoint="activities_delete")
    @api_errors("Erro ao excluir atividade")
    def activities_delete(activity_id: int):
        container.activity_service.delete_activity(activity_id)
        return no_content()

    @app.route("/api/activities/<int:activity_id>/patients", methods=["GET"], endpoint="activities_patients")
    @api_errors("Erro ao buscar pacientes da atividade")
    def activities_patients(activity_id: int):
        return ok(container.activity_service.list_activity_patients(activity_id))
