from .helpers import (
    is_valid_phone_number as is_valid_phone_number,
    is_valid_uuid as is_valid_uuid,
    is_valid_url as is_valid_url,
    mask_phone_number as mask_phone_number,
)
