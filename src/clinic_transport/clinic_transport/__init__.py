"""Clinic Transport package.

Feature modules (patients, therapists, activities, enrollments, absences,
transport) each follow the same layering: frozen dataclass models, a
repository Protocol with a MySQL implementation, a service holding the
business rules, and a thin Flask controller.
"""
