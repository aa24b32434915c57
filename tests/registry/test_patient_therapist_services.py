from __future__ import annotations

import pytest

from src.clinic_transport.clinic_transport.core.enums import DayOfWeek
from src.clinic_transport.clinic_transport.core.exceptions import NotFoundError, ValidationError
from src.clinic_transport.clinic_transport.therapists.service import normalize_work_days


def test_create_patient_strips_fields(container):
    p = container.patient_service.create_patient(name="  Maria Silva ", phone=" (11) 98765-4321 ", address="")

    assert p.name == "Maria Silva"
    assert p.phone == "(11) 98765-4321"
    assert p.address is None
    assert p.active is True


@pytest.mark.parametrize("name", ["", "   ", "M"])
def test_create_patient_requires_name(container, name):
    with pytest.raises(ValidationError):
        container.patient_service.create_patient(name=name)


def test_create_patient_rejects_non_bool_active(container):
    with pytest.raises(ValidationError):
        container.patient_service.create_patient(name="Maria", active="sim")


def test_get_patient_not_found(container):
    with pytest.raises(NotFoundError):
        container.patient_service.get_patient(123)


def test_update_patient_partial(clinic, container):
    p = clinic.add_patient("João Santos", phone="1111")

    updated = container.patient_service.update_patient(p.patient_id, changes={"active": False})

    assert updated.active is False
    assert updated.phone == "1111"
    assert updated.name == "João Santos"


def test_update_patient_unknown_field(clinic, container):
    p = clinic.add_patient("João Santos")

    with pytest.raises(ValidationError):
        container.patient_service.update_patient(p.patient_id, changes={"cpf": "000"})


def test_list_patient_activities(clinic, container):
    p = clinic.add_patient("Pedro Almeida")
    other = clinic.add_patient("Outro")
    t = clinic.add_therapist("Dra. Ana Pereira", "Terapia Ocupacional")
    act = clinic.add_activity("Terapia Ocupacional", t, DayOfWeek.TER)
    clinic.enroll(p, act)
    clinic.enroll(other, act)

    rows = container.patient_service.list_patient_activities(p.patient_id)

    assert [(r.patient_id, r.activity_name, r.therapist_name) for r in rows] == [
        (p.patient_id, "Terapia Ocupacional", "Dra. Ana Pereira")
    ]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Seg,Qua,Sex", "Seg,Qua,Sex"),
        ("sex, seg ,QUA", "Seg,Qua,Sex"),
        ("Ter,Ter", "Ter"),
        ("", None),
        (None, None),
        (" , ", None),
    ],
)
def test_normalize_work_days(raw, expected):
    assert normalize_work_days(raw) == expected


def test_normalize_work_days_rejects_weekend():
    with pytest.raises(ValidationError):
        normalize_work_days("Seg,Sab")


def test_create_therapist(container):
    t = container.therapist_service.create_therapist(
        name="Dr. Carlos Oliveira",
        specialty="Fisioterapia",
        email="carlos@clinica.com",
        work_days="qua,seg",
    )

    assert t.work_days == "Seg,Qua"
    assert t.work_day_codes == ["Seg", "Qua"]


def test_create_therapist_validation(container):
    svc = container.therapist_service
    with pytest.raises(ValidationError):
        svc.create_therapist(name="Dr. Bruno Costa", specialty="")
    with pytest.raises(ValidationError):
        svc.create_therapist(name="Dr. Bruno Costa", specialty="Fonoaudiologia", email="sem-arroba")


def test_update_therapist(clinic, container):
    t = clinic.add_therapist("Dr. Bruno Costa", "Fonoaudiologia")

    updated = container.therapist_service.update_therapist(t.therapist_id, changes={"work_days": "Sex"})

    assert updated.work_days == "Sex"
    with pytest.raises(NotFoundError):
        container.therapist_service.update_therapist(999, changes={"name": "Ninguém"})
