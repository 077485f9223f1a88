"""ORM Models: SQLAlchemy declarative models for every marketplace table.

Invariants:
    - All models inherit from Base (db/base.py)
    - Owner profiles (job_seekers, employers) are keyed 1:1 by the token subject (user_id)
    - Every other row hangs off an owner profile id

Design Decisions:
    - One file per entity for locality; the three job-seeker profile sections share one
      module (ADR: ExMA max 3-4 files to understand a feature)
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from app.models.user import User  # noqa: F401
from app.models.job_seeker import JobSeeker  # noqa: F401
from app.models.employer import Employer  # noqa: F401
from app.models.job import Job, JobRequirement, JobBenefit, JobTag  # noqa: F401
from app.models.application import Application  # noqa: F401
from app.models.profile_sections import Education, WorkHistory, Certification  # noqa: F401
from app.models.saved_job import SavedJob  # noqa: F401
from app.models.document import ProfileDocument  # noqa: F401
from app.models.profile_view import ProfileView  # noqa: F401
