"""
Base Model Module.

This module defines the foundational class for all wire models within the SDK.
It wraps Pydantic, which is used both to validate the JSON bodies received from
the Ding API and to serialize the request bodies sent to it.
"""

import re
from typing import Any

import pydantic

# Python datetimes hold microseconds; the API may send up to nanoseconds.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class BaseModel(pydantic.BaseModel):
    """
    The root base class for SDK wire models.

    Unknown fields sent by the server are ignored so that additive API changes
    never break decoding.

    NOTE: This class has been added mainly for wrapping pydantic, so that every
    wire model shares the same configuration
    """

    model_config = pydantic.ConfigDict(extra="ignore", frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """
        Returns the JSON-ready body of the model.

        Optional fields left unset are omitted, never sent as `null`.
        """
        return self.model_dump(mode="json", exclude_none=True)


def truncate_fraction(value: Any) -> Any:
    """Cuts sub-microsecond digits from an RFC 3339 timestamp string."""
    if isinstance(value, str):
        return _FRACTION_RE.sub(r"\1", value)
    return value
