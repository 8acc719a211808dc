import re

from core.exceptions import InvalidRequestException

PLATE_NUMBER_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9 \-]{0,19}$")


def is_valid_plate_number(value: str) -> bool:
    if not isinstance(value, str):
        return False
    return bool(PLATE_NUMBER_PATTERN.match(value.strip().upper()))


def normalize_plate_number(value: str) -> str:
    """Strip and upper-case a plate number, rejecting anything malformed."""
    if not is_valid_plate_number(value):
        raise InvalidRequestException(
            "Plate number may only contain letters, digits, spaces and hyphens",
            error_code="INVALID_PLATE_NUMBER",
        )
    return value.strip().upper()
