from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .absences.mysql_absence_repository import MySQLPatientAbsenceRepository, MySQLTherapistAbsenceRepository
from .absences.repository import PatientAbsenceRepository, TherapistAbsenceRepository
from .absences.service import AbsenceService
from .activities.mysql_activity_repository import MySQLActivityRepository
from .activities.repository import ActivityRepository
from .activities.service import ActivityService
from .core.constants import DEFAULT_WEEKLY_WORKERS
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.repository import EnrollmentRepository
from .enrollments.service import EnrollmentService
from .patients.mysql_patient_repository import MySQLPatientRepository
from .patients.repository import PatientRepository
from .patients.service import PatientService
from .therapists.mysql_therapist_repository import MySQLTherapistRepository
from .therapists.repository import TherapistRepository
from .therapists.service import TherapistService
from .transport.mysql_transport_repository import MySQLTransportRepository
from .transport.repository import TransportRepository
from .transport.service import TransportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    patients_repo: PatientRepository
    therapists_repo: TherapistRepository
    activities_repo: ActivityRepository
    enrollments_repo: EnrollmentRepository
    patient_absences_repo: PatientAbsenceRepository
    therapist_absences_repo: TherapistAbsenceRepository
    transport_repo: TransportRepository

    patient_service: PatientService
    therapist_service: TherapistService
    activity_service: ActivityService
    enrollment_service: EnrollmentService
    absence_service: AbsenceService
    transport_service: TransportService


def wire_services(
    *,
    conn: Optional[DatabaseConnection],
    patients_repo: PatientRepository,
    therapists_repo: TherapistRepository,
    activities_repo: ActivityRepository,
    enrollments_repo: EnrollmentRepository,
    patient_absences_repo: PatientAbsenceRepository,
    therapist_absences_repo: TherapistAbsenceRepository,
    transport_repo: TransportRepository,
    weekly_workers: int = DEFAULT_WEEKLY_WORKERS,
) -> Container:
    """Build every service on top of the given repositories.

    Tests call this directly with in-memory repositories.
    """

    return Container(
        conn=conn,
        patients_repo=patients_repo,
        therapists_repo=therapists_repo,
        activities_repo=activities_repo,
        enrollments_repo=enrollments_repo,
        patient_absences_repo=patient_absences_repo,
        therapist_absences_repo=therapist_absences_repo,
        transport_repo=transport_repo,
        patient_service=PatientService(patients_repo, enrollments_repo),
        therapist_service=TherapistService(therapists_repo),
        activity_service=ActivityService(activities_repo, therapists_repo),
        enrollment_service=EnrollmentService(enrollments_repo, patients_repo, activities_repo),
        absence_service=AbsenceService(patient_absences_repo, therapist_absences_repo, patients_repo, therapists_repo),
        transport_service=TransportService(
            transport_repo,
            patient_absences_repo,
            therapist_absences_repo,
            weekly_workers=weekly_workers,
        ),
    )


def build_container(*, db_config: dict, weekly_workers: int = DEFAULT_WEEKLY_WORKERS) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_services(
        conn=conn,
        patients_repo=MySQLPatientRepository(conn),
        therapists_repo=MySQLTherapistRepository(conn),
        activities_repo=MySQLActivityRepository(conn),
        enrollments_repo=MySQLEnrollmentRepository(conn),
        patient_absences_repo=MySQLPatientAbsenceRepository(conn),
        therapist_absences_repo=MySQLTherapistAbsenceRepository(conn),
        transport_repo=MySQLTransportRepository(conn),
        weekly_workers=weekly_workers,
    )
