"""Shared schema plumbing: trimming, blank-to-None, partial-date parsing.

Invariants:
    - Every inbound string is stripped before length/pattern checks
    - Optional strings that end up blank are stored as None, never ""
    - Month-only dates ("2021-06") are accepted and pinned to the first day
"""

import re
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

PHONE_PATTERN = r"^(\+63|0)?[0-9]{10,11}$"
HTTP_URL_PATTERN = r"^https?://\S+$"

_MONTH_ONLY = re.compile(r"^(\d{4})-(\d{2})$")


class RequestModel(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(
        str_strip_whitespace=True, use_enum_values=True, validate_default=True,
    )

    @model_validator(mode="after")
    def blank_strings_to_none(self):
        for name, value in self.__dict__.items():
            if value == "":
                setattr(self, name, None)
        return self

    def changes(self) -> dict[str, Any]:
        """Only the fields the client actually sent (PATCH-like PUT)."""
        return self.model_dump(exclude_unset=True)


def parse_partial_date(value: Any) -> Any:
    """Accept YYYY-MM as well as full ISO dates; blank means None."""
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        match = _MONTH_ONLY.match(value)
        if match:
            return date(int(match.group(1)), int(match.group(2)), 1)
    return value
