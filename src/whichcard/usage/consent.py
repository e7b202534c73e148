import re
from enum import Enum
from urllib.parse import unquote

CONSENT_COOKIE_NAME = "whichcard_consent"
CONSENT_MAX_AGE_SECONDS = 60 * 60 * 24 * 365

_COOKIE_PATTERN = re.compile(rf"{CONSENT_COOKIE_NAME}=([^;]+)")


class ConsentLevel(str, Enum):
    FULL = "full"
    NONE = "none"


def parse_consent_from_cookie(cookie_header: str | None) -> ConsentLevel | None:
    """Return the consent decision stored in a Cookie header, or None if undecided."""
    if not cookie_header:
        return None
    match = _COOKIE_PATTERN.search(cookie_header)
    if not match:
        return None
    value = unquote(match.group(1)).strip()
    try:
        return ConsentLevel(value)
    except ValueError:
        return None


def allows_logging(consent: ConsentLevel | None) -> bool:
    return consent == ConsentLevel.FULL
