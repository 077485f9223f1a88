"""Registration Schemas: one body per account type, told apart by user_type.

Invariants:
    - email is lower-cased; every string except password is trimmed
    - password: at least 8 characters with a lowercase letter, an uppercase
      letter and a digit
    - Job seekers must name a profession and location; employers must give
      the facility fields their profile requires (name is the contact person)
"""

import re
from typing import Annotated, Any, Literal, Union

from fastapi import Body
from pydantic import ConfigDict, Field, field_validator, model_validator

from app.core.domain_types import ExperienceLevel
from app.schemas.common import PHONE_PATTERN, RequestModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

_PASSWORD_RULES = (re.compile(r"[a-z]"), re.compile(r"[A-Z]"), re.compile(r"\d"))


class _Registration(RequestModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    email: str = Field(max_length=320, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(min_length=2, max_length=100)

    @model_validator(mode="before")
    @classmethod
    def strip_all_but_password(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value.strip() if isinstance(value, str) and key != "password" else value
                for key, value in data.items()
            }
        return data

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def strong_password(cls, value: str) -> str:
        if not all(rule.search(value) for rule in _PASSWORD_RULES):
            raise ValueError(
                "Password must contain at least 8 characters, one uppercase, "
                "one lowercase, and one number"
            )
        return value


class JobSeekerRegistration(_Registration):
    user_type: Literal["job_seeker"]
    profession: str = Field(min_length=2, max_length=100)
    location: str = Field(min_length=2, max_length=200)
    experience: ExperienceLevel | None = None
    phone: str | None = Field(None, pattern=PHONE_PATTERN)


class EmployerRegistration(_Registration):
    user_type: Literal["employer"]
    facility_name: str = Field(min_length=2, max_length=200)
    facility_type: str = Field(min_length=2, max_length=100)
    phone: str = Field(pattern=PHONE_PATTERN)
    address: str = Field(min_length=5, max_length=500)
    city: str = Field(min_length=2, max_length=100)


Registration = Annotated[
    Union[JobSeekerRegistration, EmployerRegistration],
    Body(discriminator="user_type"),
]
