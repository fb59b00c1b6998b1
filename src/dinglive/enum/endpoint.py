from enum import StrEnum


# --- Centralized Endpoints Enum ---
# Single source of truth for the POST paths exposed by the Ding API.
class Endpoint(StrEnum):
    AUTHENTICATION = "authentication"
    CHECK = "check"
    RETRY = "retry"
