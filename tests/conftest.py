from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Optional

import pytest

from src.clinic_transport.clinic_transport.absences.model import PatientAbsence, TherapistAbsence
from src.clinic_transport.clinic_transport.activities.model import Activity, ActivityWithNames, EnrolledPatient
from src.clinic_transport.clinic_transport.container import wire_services
from src.clinic_transport.clinic_transport.core.enums import DayOfWeek
from src.clinic_transport.clinic_transport.enrollments.model import PatientActivity, PatientActivityDetails
from src.clinic_transport.clinic_transport.patients.model import Patient
from src.clinic_transport.clinic_transport.therapists.model import Therapist
from src.clinic_transport.clinic_transport.transport.model import ScheduledEnrollment

# 2026-02-02 is a Monday.
MONDAY = date(2026, 2, 2)


class InMemoryClinic:
    """Tables shared by the in-memory repositories below."""

    def __init__(self):
        self.patients: dict[int, Patient] = {}
        self.therapists: dict[int, Therapist] = {}
        self.activities: dict[int, Activity] = {}
        self.enrollments: dict[int, PatientActivity] = {}
        self.patient_absences: dict[int, PatientAbsence] = {}
        self.therapist_absences: dict[int, TherapistAbsence] = {}
        self._next_id = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    # ----- helpers used by tests to arrange data -----

    def add_patient(self, name: str, **kw) -> Patient:
        p = Patient(patient_id=self.next_id(), name=name, **kw)
        self.patients[p.patient_id] = p
        return p

    def add_therapist(self, name: str, specialty: str = "Fisioterapia", **kw) -> Therapist:
        t = Therapist(therapist_id=self.next_id(), name=name, specialty=specialty, **kw)
        self.therapists[t.therapist_id] = t
        return t

    def add_activity(
        self,
        name: str,
        therapist: Therapist,
        day: DayOfWeek,
        start: time = time(8, 0),
        end: time = time(9, 0),
        *,
        active: bool = True,
    ) -> Activity:
        a = Activity(
            activity_id=self.next_id(),
            name=name,
            therapist_id=therapist.therapist_id,
            day_of_week=day,
            start_time=start,
            end_time=end,
            active=active,
        )
        self.activities[a.activity_id] = a
        return a

    def enroll(
        self, patient: Patient, activity: Activity, *, transport_needed: bool = True, active: bool = True
    ) -> PatientActivity:
        e = PatientActivity(
            patient_activity_id=self.next_id(),
            patient_id=patient.patient_id,
            activity_id=activity.activity_id,
            transport_needed=transport_needed,
            active=active,
        )
        self.enrollments[e.patient_activity_id] = e
        return e

    def patient_absent(self, patient: Patient, on: date, reason: Optional[str] = None) -> PatientAbsence:
        a = PatientAbsence(absence_id=self.next_id(), patient_id=patient.patient_id, absence_date=on, reason=reason)
        self.patient_absences[a.absence_id] = a
        return a

    def therapist_absent(self, therapist: Therapist, on: date, reason: Optional[str] = None) -> TherapistAbsence:
        a = TherapistAbsence(
            absence_id=self.next_id(), therapist_id=therapist.therapist_id, absence_date=on, reason=reason
        )
        self.therapist_absences[a.absence_id] = a
        return a


class InMemoryPatients:
    def __init__(self, db: InMemoryClinic):
        self._db = db

    def list_all(self):
        return sorted(self._db.patients.values(), key=lambda p: p.name)

    def get_by_id(self, patient_id: int) -> Optional[Patient]:
        return self._db.patients.get(int(patient_id))

    def create(self, *, name, phone, address, active=True) -> int:
        return self._db.add_patient(name, phone=phone, address=address, active=active).patient_id

    def update(self, patient_id: int, *, changes) -> bool:
        current = self._db.patients.get(int(patient_id))
        if not current:
            return False
        self._db.patients[current.patient_id] = replace(current, **changes)
        return True


class InMemoryTherapists:
    def __init__(self, db: InMemoryClinic):
        self._db = db

    def list_all(self):
        return sorted(self._db.therapists.values(), key=lambda t: t.name)

    def get_by_id(self, therapist_id: int) -> Optional[Therapist]:
        return self._db.therapists.get(int(therapist_id))

    def create(self, *, name, specialty, email, phone, work_days, active=True) -> int:
        t = self._db.add_therapist(name, specialty, email=email, phone=phone, work_days=work_days, active=active)
        return t.therapist_id

    def update(self, therapist_id: int, *, changes) -> bool:
        current = self._db.therapists.get(int(therapist_id))
        if not current:
            return False
        self._db.therapists[current.therapist_id] = replace(current, **changes)
        return True


class InMemoryActivities:
    def __init__(self, db: InMemoryClinic):
        self._db = db

    def list_with_names(self, *, day_of_week=None):
        rows = [a for a in self._db.activities.values() if a.active]
        if day_of_week is not None:
            rows = [a for a in rows if a.day_of_week == day_of_week]
        rows.sort(key=lambda a: (a.day_of_week.index, a.start_time))
        return [
            ActivityWithNames(
                activity_id=a.activity_id,
                name=a.name,
                therapist_id=a.therapist_id,
                therapist_name=self._db.therapists[a.therapist_id].name,
                day_of_week=a.day_of_week,
                start_time=a.start_time,
                end_time=a.end_time,
                notes=a.notes,
                active=a.active,
            )
            for a in rows
        ]

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        return self._db.activities.get(int(activity_id))

    def create(self, *, name, therapist_id, day_of_week, start_time, end_time, notes, active=True) -> int:
        a = self._db.add_activity(name, self._db.therapists[therapist_id], day_of_week, start_time, end_time, active=active)
        self._db.activities[a.activity_id] = replace(a, notes=notes)
        return a.activity_id

    def update(self, activity_id: int, *, changes) -> bool:
        current = self._db.activities.get(int(activity_id))
        if not current:
            return False
        self._db.activities[current.activity_id] = replace(current, **changes)
        return True

    def set_active(self, activity_id: int, *, active: bool) -> bool:
        return self.update(activity_id, changes={"active": active})

    def list_patients(self, activity_id: int):
        return [
            EnrolledPatient(
                patient_activity_id=e.patient_activity_id,
                patient_id=e.patient_id,
                patient_name=self._db.patients[e.patient_id].name,
                transport_needed=e.transport_needed,
            )
            for e in self._db.enrollments.values()
            if e.activity_id == int(activity_id) and e.active
        ]


class InMemoryEnrollments:
    def __init__(self, db: InMemoryClinic):
        self._db = db

    def list_with_details(self, *, patient_id=None):
        out = []
        for e in self._db.enrollments.values():
            if not e.active or (patient_id is not None and e.patient_id != patient_id):
                continue
            a = self._db.activities[e.activity_id]
            out.append(
                PatientActivityDetails(
                    patient_activity_id=e.patient_activity_id,
                    patient_id=e.patient_id,
                    patient_name=self._db.patients[e.patient_id].name,
                    activity_id=a.activity_id,
                    activity_name=a.name,
                    day_of_week=a.day_of_week,
                    start_time=a.start_time,
                    end_time=a.end_time,
                    therapist_id=a.therapist_id,
                    therapist_name=self._db.therapists[a.therapist_id].name,
                    transport_needed=e.transport_needed,
                    active=e.active,
                )
            )
        return out

    def get_by_id(self, patient_activity_id: int) -> Optional[PatientActivity]:
        return self._db.enrollments.get(int(patient_activity_id))

    def create(self, *, patient_id, activity_id, transport_needed, active=True) -> int:
        e = self._db.enroll(
            self._db.patients[patient_id],
            self._db.activities[activity_id],
            transport_needed=transport_needed,
            active=active,
        )
        return e.patient_activity_id

    def update(self, patient_activity_id: int, *, changes) -> bool:
        current = self._db.enrollments.get(int(patient_activity_id))
        if not current:
            return False
        self._db.enrollments[current.patient_activity_id] = replace(current, **changes)
        return True

    def set_active(self, patient_activity_id: int, *, active: bool) -> bool:
        return self.update(patient_activity_id, changes={"active": active})


class InMemoryPatientAbsences:
    def __init__(self, db: InMemoryClinic):
        self._db = db

    def list(self, *, on=None, patient_id=None):
        rows = list(self._db.patient_absences.values())
        if on is not None:
            rows = [a for a in rows if a.absence_date == on]
        if patient_id is not None:
            rows = [a for a in rows if a.patient_id == patient_id]
        return rows

    def get_by_id(self, absence_id: int):
        return self._db.patient_absences.get(int(absence_id))

    def get_for(self, *, patient_id, on):
        for a in self._db.patient_absences.values():
            if a.patient_id == patient_id and a.absence_date == on:
                return a
        return None

    def create(self, *, patient_id, absence_date, reason=None) -> int:
        return self._db.patient_absent(self._db.patients[patient_id], absence_date, reason).absence_id

    def delete(self, absence_id: int) -> bool:
        return self._db.patient_absences.pop(int(absence_id), None) is not None


class InMemoryTherapistAbsences:
    def __init__(self, db: InMemoryClinic):
        self._db = db

    def list(self, *, on=None, therapist_id=None):
        rows = list(self._db.therapist_absences.values())
        if on is not None:
            rows = [a for a in rows if a.absence_date == on]
        if therapist_id is not None:
            rows = [a for a in rows if a.therapist_id == therapist_id]
        return rows

    def get_by_id(self, absence_id: int):
        return self._db.therapist_absences.get(int(absence_id))

    def get_for(self, *, therapist_id, on):
        for a in self._db.therapist_absences.values():
            if a.therapist_id == therapist_id and a.absence_date == on:
                return a
        return None

    def create(self, *, therapist_id, absence_date, reason=None) -> int:
        return self._db.therapist_absent(self._db.therapists[therapist_id], absence_date, reason).absence_id

    def delete(self, absence_id: int) -> bool:
        return self._db.therapist_absences.pop(int(absence_id), None) is not None


class InMemoryTransport:
    """Same filter and ordering as the SQL join."""

    def __init__(self, db: InMemoryClinic):
        self._db = db
        self.calls: list[DayOfWeek] = []

    def list_scheduled_enrollments(self, day_of_week):
        self.calls.append(day_of_week)
        out = []
        for e in self._db.enrollments.values():
            a = self._db.activities[e.activity_id]
            if not (e.active and e.transport_needed and a.active and a.day_of_week == day_of_week):
                continue
            out.append(
                ScheduledEnrollment(
                    patient_activity_id=e.patient_activity_id,
                    patient_id=e.patient_id,
                    patient_name=self._db.patients[e.patient_id].name,
                    activity_id=a.activity_id,
                    activity_name=a.name,
                    therapist_id=a.therapist_id,
                    therapist_name=self._db.therapists[a.therapist_id].name,
                    start_time=a.start_time,
                    end_time=a.end_time,
                )
            )
        out.sort(key=lambda s: (s.start_time, s.patient_activity_id))
        return out


@pytest.fixture
def clinic():
    return InMemoryClinic()


@pytest.fixture
def container(clinic):
    return wire_services(
        conn=None,
        patients_repo=InMemoryPatients(clinic),
        therapists_repo=InMemoryTherapists(clinic),
        activities_repo=InMemoryActivities(clinic),
        enrollments_repo=InMemoryEnrollments(clinic),
        patient_absences_repo=InMemoryPatientAbsences(clinic),
        therapist_absences_repo=InMemoryTherapistAbsences(clinic),
        transport_repo=InMemoryTransport(clinic),
        weekly_workers=1,
    )


@pytest.fixture
def client(container, monkeypatch):
    from src.clinic_transport.clinic_transport.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


@pytest.fixture
def monday():
    return MONDAY
