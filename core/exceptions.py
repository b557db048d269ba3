#!/usr/bin/env python3
"""
Custom exceptions for the readiness engine.

- NotFoundException: unknown student/job, surfaced to the immediate caller
- ComputationSkipped: a sub-signal source is unavailable; scored as 0
- PersistenceFailure: the store rejected a write
"""


class ServiceException(Exception):
    """Base exception for readiness engine errors."""
    pass


class NotFoundException(ServiceException):
    """Raised when a requested entity does not exist."""
    pass


class StudentNotFoundException(NotFoundException):
    """Raised when a student is not found (or is soft-deleted)."""

    def __init__(self, student_id):
        super().__init__(f"Student not found: {student_id}")
        self.student_id = student_id


class JobNotFoundException(NotFoundException):
    """Raised when a job is not found."""

    def __init__(self, job_id):
        super().__init__(f"Job not found: {job_id}")
        self.job_id = job_id


class ComputationSkipped(ServiceException):
    """Raised when a signal cannot be computed; the component contributes 0."""

    def __init__(self, component: str, reason: str):
        super().__init__(f"{component} skipped: {reason}")
        self.component = component
        self.reason = reason


class PersistenceFailure(ServiceException):
    """Raised when the durable store rejects a write."""
    pass
