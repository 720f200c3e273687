"""Public id generation and hardware UID normalization"""

import logging
import re
import secrets
import string
from typing import Callable

from tagchip.errors.identifier import (
    IdentifierExhausted,
    InvalidUid,
    PublicIdFormatInvalid,
)

logger = logging.getLogger(__name__)

PUBLIC_ID_ALPHABET = string.ascii_letters + string.digits + "-_"
PUBLIC_ID_MIN_LENGTH = 4
PUBLIC_ID_MAX_LENGTH = 64
PUBLIC_ID_RE = re.compile(r"^[A-Za-z0-9\-_]{4,64}$")

_NON_HEX_RE = re.compile(r"[^0-9a-fA-F]")


def normalize_uid(raw: str) -> str:
    """Keep hex digits only, uppercased. "04:a2 3b-ff" -> "04A23BFF"."""
    uid = _NON_HEX_RE.sub("", raw or "").upper()
    if not uid:
        raise InvalidUid(repr(raw))
    return uid


def validate_public_id(value: str) -> str:
    if not isinstance(value, str) or not PUBLIC_ID_RE.fullmatch(value):
        raise PublicIdFormatInvalid(repr(value))
    return value


def generate_public_id(
    exists: Callable[[str], bool],
    length: int = 10,
    max_attempts: int = 5,
) -> str:
    """Draw random public ids until one is not taken according to `exists`.

    `exists` only narrows the window, the unique constraint on tags.public_id
    is what finally rejects a duplicate inserted concurrently.
    """
    if not PUBLIC_ID_MIN_LENGTH <= length <= PUBLIC_ID_MAX_LENGTH:
        raise PublicIdFormatInvalid(f"length={length}")
    for attempt in range(1, max_attempts + 1):
        candidate = "".join(secrets.choice(PUBLIC_ID_ALPHABET) for _ in range(length))
        if not exists(candidate):
            return candidate
        logger.warning(
            "public_id collision on attempt %d/%d (length=%d)",
            attempt,
            max_attempts,
            length,
        )
    logger.error(
        "public_id generation exhausted %d attempts at length=%d, "
        "identifier space or retry budget is misconfigured",
        max_attempts,
        length,
    )
    raise IdentifierExhausted(f"{max_attempts} attempts, length={length}")
