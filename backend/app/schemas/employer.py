"""Employer Profile Schemas: create and partial update of employers rows."""

from pydantic import Field

from app.schemas.common import PHONE_PATTERN, RequestModel

# scheme optional, matches what facilities type into the signup form
WEBSITE_PATTERN = r"^(https?://)?[\da-z.-]+\.[a-z.]{2,6}[/\w .-]*/?$"


class EmployerCreate(RequestModel):
    facility_name: str = Field(min_length=2, max_length=200)
    phone: str = Field(pattern=PHONE_PATTERN)
    address: str = Field(min_length=5, max_length=500)
    city: str = Field(min_length=2, max_length=100)
    website: str | None = Field(None, max_length=200, pattern=WEBSITE_PATTERN)
    facility_type: str = Field(min_length=2, max_length=100)
    contact_person: str = Field(min_length=2, max_length=200)
    description: str | None = Field(None, max_length=2000)
    total_employees: str | None = Field(None, max_length=50)
    years_in_operation: str | None = Field(None, max_length=50)


class EmployerUpdate(RequestModel):
    facility_name: str | None = Field(None, min_length=2, max_length=200)
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    address: str | None = Field(None, min_length=5, max_length=500)
    city: str | None = Field(None, min_length=2, max_length=100)
    website: str | None = Field(None, max_length=200, pattern=WEBSITE_PATTERN)
    facility_type: str | None = Field(None, min_length=2, max_length=100)
    contact_person: str | None = Field(None, min_length=2, max_length=200)
    description: str | None = Field(None, max_length=2000)
    total_employees: str | None = Field(None, max_length=50)
    years_in_operation: str | None = Field(None, max_length=50)
