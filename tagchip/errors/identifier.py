"""Public id and hardware UID errors"""

from tagchip.errors.base import ApplicationError


class InvalidUid(ApplicationError):
    http_code = 422
    error_code = 5001
    error = "nfc_uid is required and must contain hex digits"


class PublicIdFormatInvalid(ApplicationError):
    http_code = 422
    error_code = 5002
    error = "public_id must match ^[A-Za-z0-9-_]{4,64}$"


class IdentifierExhausted(ApplicationError):
    http_code = 503
    error_code = 5010
    error = "Could not generate a unique public_id, retry budget exhausted"
