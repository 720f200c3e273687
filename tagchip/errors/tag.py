"""Tag registry errors"""

from tagchip.errors.base import ApplicationError
from tagchip.errors.common import NotFoundError


class TagNotFound(NotFoundError):
    http_code = 404
    error_code = 1405
    error = "Tag not found"


class AssetProjectMismatch(ApplicationError):
    http_code = 422
    error_code = 5003
    error = "asset_id must belong to the same project"


class UnsupportedClaimMode(ApplicationError):
    http_code = 422
    error_code = 5004
    error = "claim_mode must be one of: code, secure_tap, first_to_claim"


class UidInUse(ApplicationError):
    http_code = 409
    error_code = 6001
    error = "nfc_uid already in use"


class PublicIdInUse(ApplicationError):
    http_code = 409
    error_code = 6002
    error = "public_id already exists"


class InvalidTransition(ApplicationError):
    http_code = 409
    error_code = 7003
    error = "Tag status transition is not allowed"
