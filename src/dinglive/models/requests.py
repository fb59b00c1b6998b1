"""
Request bodies sent to the Ding API, one model per endpoint.
"""

from typing import Optional

from .base_model import BaseModel


class AuthRequest(BaseModel):
    """Body of `POST /authentication`."""

    phone_number: str
    customer_uuid: str
    ip: Optional[str] = None
    device_id: Optional[str] = None
    device_type: Optional[str] = None
    app_version: Optional[str] = None
    callback_url: Optional[str] = None
    is_returning_user: Optional[bool] = None


class CheckRequest(BaseModel):
    """Body of `POST /check`."""

    customer_uuid: str
    authentication_uuid: str
    check_code: str


class RetryRequest(BaseModel):
    """Body of `POST /retry`."""

    customer_uuid: str
    authentication_uuid: str
