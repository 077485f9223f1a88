"""Domain Types: verifies the closed vocabularies and record caps.

Tests:
    - Enums serialize to the strings stored in the database
    - Application pipeline has exactly 5 states
    - Section caps match the limits enforced on create
"""

import json

from app.core.domain_types import (
    ApplicationStatus, DocumentType, EmploymentType, JobStatus, UserType,
    MAX_CERTIFICATION_ENTRIES, MAX_EDUCATION_ENTRIES, MAX_EXPERIENCE_ENTRIES,
)


def test_enums_serialize_to_strings():
    assert json.dumps(JobStatus.ACTIVE) == '"active"'
    assert ApplicationStatus.UNDER_REVIEW == "under-review"
    assert UserType.JOB_SEEKER == "job_seeker"


def test_application_pipeline_states():
    assert [s.value for s in ApplicationStatus] == [
        "applied", "under-review", "interview-scheduled", "offered", "rejected",
    ]


def test_job_statuses():
    assert {s.value for s in JobStatus} == {"active", "pending", "closed", "expired"}


def test_employment_types_are_hyphenated():
    assert EmploymentType("per-diem") is EmploymentType.PER_DIEM


def test_document_types_include_other():
    assert DocumentType("other") is DocumentType.OTHER


def test_section_caps():
    assert MAX_EDUCATION_ENTRIES == 10
    assert MAX_EXPERIENCE_ENTRIES == 10
    assert MAX_CERTIFICATION_ENTRIES == 20
