from __future__ import annotations

import csv
import io
from datetime import time

from src.clinic_transport.clinic_transport.common import datetime_utils
from src.clinic_transport.clinic_transport.core.enums import DayOfWeek


def _seed_monday(clinic):
    carlos = clinic.add_therapist("Dr. Carlos Oliveira", "Fisioterapia")
    ana = clinic.add_therapist("Dra. Ana Pereira", "Terapia Ocupacional")
    fisio = clinic.add_activity("Fisioterapia Motora", carlos, DayOfWeek.SEG, time(8, 0), time(9, 0))
    to = clinic.add_activity("Terapia Ocupacional", ana, DayOfWeek.SEG, time(10, 0), time(11, 0))
    maria = clinic.add_patient("Maria Silva")
    joao = clinic.add_patient("João Santos")
    clinic.enroll(maria, fisio)
    clinic.enroll(joao, fisio)
    clinic.enroll(joao, to)
    return carlos, ana, maria, joao


def test_transport_list(client, clinic, monday):
    carlos, _, maria, joao = _seed_monday(clinic)
    clinic.therapist_absent(carlos, monday)

    resp = client.get("/api/transport?date=2026-02-02")

    assert resp.status_code == 200
    body = resp.get_json()
    assert [i["patientName"] for i in body] == ["João Santos", "Maria Silva"]
    assert [i["isAbsent"] for i in body] == [False, True]
    assert body[0]["activities"][0]["startTime"] == "08:00:00"
    assert body[0]["activities"][0]["therapistAbsent"] is True


def test_transport_list_defaults_to_today(client, clinic, monday, monkeypatch):
    _seed_monday(clinic)
    monkeypatch.setattr(datetime_utils, "today_local", lambda: monday)

    resp = client.get("/api/transport")

    assert resp.status_code == 200
    assert len(resp.get_json()) == 2


def test_transport_list_bad_date(client):
    resp = client.get("/api/transport?date=02-02-2026")

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["message"] == "Dados inválidos"
    assert body["errors"]


def test_transport_weekly(client, clinic):
    _seed_monday(clinic)

    resp = client.get("/api/transport/weekly?startDate=2026-02-05")

    assert resp.status_code == 200
    body = resp.get_json()
    assert list(body) == ["Seg", "Ter", "Qua", "Qui", "Sex"]
    assert len(body["Seg"]) == 2
    assert body["Ter"] == []


def test_transport_stats(client, clinic, monday):
    _, _, maria, _ = _seed_monday(clinic)
    clinic.patient_absent(maria, monday)

    resp = client.get("/api/stats/transport?date=2026-02-02")

    assert resp.status_code == 200
    assert resp.get_json() == {"total": 2, "confirmed": 1, "absent": 1}


def test_transport_csv(client, clinic, monday):
    _, _, maria, _ = _seed_monday(clinic)
    clinic.patient_absent(maria, monday)

    resp = client.get("/api/transport.csv?date=2026-02-02")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "transporte_2026-02-02.csv" in resp.headers["Content-Disposition"]
    rows = list(csv.DictReader(io.StringIO(resp.data.decode("utf-8-sig"))))
    assert [(r["patient_name"], r["activity_name"], r["status"]) for r in rows] == [
        ("João Santos", "Fisioterapia Motora", "Confirmado"),
        ("João Santos", "Terapia Ocupacional", "Confirmado"),
        ("Maria Silva", "Fisioterapia Motora", "Ausente"),
    ]


def test_store_failure_returns_500(client, container, monkeypatch):
    def boom(day_of_week):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(container.transport_repo, "list_scheduled_enrollments", boom)

    resp = client.get("/api/transport?date=2026-02-02")

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Erro ao buscar lista de transporte"}


def test_toggle_patient_absence(client, clinic, monday):
    p = clinic.add_patient("Maria Silva")

    resp = client.post("/api/patient-absences/toggle", json={"patientId": p.patient_id, "date": "2026-02-02"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["absent"] is True
    assert body["absence"]["absenceDate"] == "2026-02-02"

    resp = client.post("/api/patient-absences/toggle", json={"patientId": p.patient_id, "date": "2026-02-02"})
    assert resp.get_json() == {"absent": False, "absence": None}


def test_patient_absences_crud(client, clinic):
    p = clinic.add_patient("Maria Silva")

    created = client.post(
        "/api/patient-absences", json={"patientId": p.patient_id, "date": "2026-02-02", "reason": "gripe"}
    )
    assert created.status_code == 201
    absence_id = created.get_json()["absenceId"]

    dup = client.post("/api/patient-absences", json={"patientId": p.patient_id, "date": "2026-02-02"})
    assert dup.status_code == 400

    listed = client.get(f"/api/patient-absences?date=2026-02-02&patientId={p.patient_id}")
    assert [a["absenceId"] for a in listed.get_json()] == [absence_id]

    assert client.delete(f"/api/patient-absences/{absence_id}").status_code == 204
    assert client.delete(f"/api/patient-absences/{absence_id}").status_code == 404


def test_therapist_absences(client, clinic):
    t = clinic.add_therapist("Dr. Bruno Costa", "Fonoaudiologia")

    created = client.post("/api/therapist-absences", json={"therapistId": t.therapist_id, "date": "2026-02-03"})
    assert created.status_code == 201

    listed = client.get("/api/therapist-absences?date=2026-02-03").get_json()
    assert [a["therapistId"] for a in listed] == [t.therapist_id]

    missing = client.post("/api/therapist-absences", json={"therapistId": 999, "date": "2026-02-03"})
    assert missing.status_code == 404


def test_patients_endpoints(client):
    created = client.post("/api/patients", json={"name": "Pedro Almeida", "phone": "(11) 91234-5678"})
    assert created.status_code == 201
    patient_id = created.get_json()["patientId"]

    assert client.get(f"/api/patients/{patient_id}").get_json()["name"] == "Pedro Almeida"
    assert [p["name"] for p in client.get("/api/patients").get_json()] == ["Pedro Almeida"]

    patched = client.patch(f"/api/patients/{patient_id}", json={"active": False})
    assert patched.get_json()["active"] is False

    assert client.get("/api/patients/999").status_code == 404
    assert client.get("/api/patients/999/activities").status_code == 404


def test_patients_rejects_bad_bodies(client):
    assert client.post("/api/patients", json={"name": ""}).status_code == 400
    assert client.post("/api/patients", json={"name": "Pedro", "cpf": "1"}).status_code == 400
    assert client.post("/api/patients", data="not json", content_type="text/plain").status_code == 400


def test_activity_and_enrollment_flow(client, clinic, monday):
    carlos = clinic.add_therapist("Dr. Carlos Oliveira", "Fisioterapia")
    maria = clinic.add_patient("Maria Silva")

    act = client.post(
        "/api/activities",
        json={
            "name": "Fisioterapia Motora",
            "therapistId": carlos.therapist_id,
            "dayOfWeek": "Seg",
            "startTime": "08:00",
            "endTime": "09:00",
        },
    )
    assert act.status_code == 201
    activity_id = act.get_json()["activityId"]
    assert act.get_json()["dayOfWeek"] == "Seg"

    enr = client.post("/api/patient-activities", json={"patientId": maria.patient_id, "activityId": activity_id})
    assert enr.status_code == 201
    assert enr.get_json()["transportNeeded"] is True

    assert [a["name"] for a in client.get("/api/activities?dayOfWeek=Seg").get_json()] == ["Fisioterapia Motora"]
    assert client.get("/api/activities?dayOfWeek=Dom").status_code == 400
    patients = client.get(f"/api/activities/{activity_id}/patients").get_json()
    assert [p["patientName"] for p in patients] == ["Maria Silva"]

    assert len(client.get("/api/transport?date=2026-02-02").get_json()) == 1

    assert client.delete(f"/api/activities/{activity_id}").status_code == 204
    assert client.get("/api/transport?date=2026-02-02").get_json() == []


def test_therapists_endpoints(client):
    created = client.post(
        "/api/therapists",
        json={"name": "Dra. Ana Pereira", "specialty": "Terapia Ocupacional", "workDays": "Ter,Qui"},
    )
    assert created.status_code == 201
    body = created.get_json()
    assert body["workDays"] == "Ter,Qui"

    patched = client.patch(f"/api/therapists/{body['therapistId']}", json={"workDays": "Sab"})
    assert patched.status_code == 400
