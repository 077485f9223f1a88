"""Domain Types: the closed vocabularies of the marketplace.

Invariants:
    - All valid states encoded as Enums, no raw string matching in services
    - Owner kinds map 1:1 to owner profile tables (job_seekers, employers)
    - Record caps are constants here, never literals in services

Design Decisions:
    - str Enums: serialize to JSON and compare equal to stored column strings
      without custom encoders
"""

from enum import Enum


class UserType(str, Enum):
    """user_metadata.user_type claim set at signup."""
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"


class OwnerKind(str, Enum):
    """Which owner profile a subject resolves to."""
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"


class ExperienceLevel(str, Enum):
    ENTRY = "entry-level"
    MID = "mid-level"
    SENIOR = "senior-level"
    EXPERT = "expert-level"


class Availability(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    PER_DIEM = "per-diem"


class EmploymentType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    PER_DIEM = "per-diem"


class JobStatus(str, Enum):
    """Posting lifecycle: pending until published, only active is public."""
    ACTIVE = "active"
    PENDING = "pending"
    CLOSED = "closed"
    EXPIRED = "expired"


class ApplicationStatus(str, Enum):
    """Hiring pipeline states, set by the employer who owns the job."""
    APPLIED = "applied"
    UNDER_REVIEW = "under-review"
    INTERVIEW_SCHEDULED = "interview-scheduled"
    OFFERED = "offered"
    REJECTED = "rejected"


class DocumentType(str, Enum):
    RESUME = "resume"
    LICENSE = "license"
    CERTIFICATION = "certification"
    DIPLOMA = "diploma"
    TRANSCRIPT = "transcript"
    OTHER = "other"


# ─── Record caps per job-seeker profile ──────────────────────────

MAX_EDUCATION_ENTRIES = 10
MAX_EXPERIENCE_ENTRIES = 10
MAX_CERTIFICATION_ENTRIES = 20

MAX_JOB_REQUIREMENTS = 20
MAX_JOB_BENEFITS = 20
MAX_JOB_TAGS = 10


# ─── Listing filter sentinels (sent by the UI's "any" options) ───

ALL_CATEGORIES = "All Categories"
ALL_LOCATIONS = "All Locations"
ALL_FACILITIES = "All Facilities"
