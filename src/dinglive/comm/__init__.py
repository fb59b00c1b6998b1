from .ding_client import (
    DingClient as DingClient,
    AsyncDingClient as AsyncDingClient,
)
