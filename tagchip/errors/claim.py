"""Claim engine errors. All of them are shown to the person tapping the tag."""

from tagchip.errors.base import ApplicationError


class TagDisabled(ApplicationError):
    http_code = 410
    error_code = 7001
    error = "Tag is disabled"


class AlreadyClaimed(ApplicationError):
    http_code = 410
    error_code = 7002
    error = "Tag is already claimed"


class ClaimModeProofFailed(ApplicationError):
    http_code = 403
    error_code = 7004
    error = "Secure tap proof was not accepted"


class InvalidClaimCode(ApplicationError):
    http_code = 403
    error_code = 7005
    error = "Claim code is invalid"


class ClaimantNotAllowed(ApplicationError):
    http_code = 403
    error_code = 7006
    error = "Only customer profiles can claim tags"


class ClaimModeMismatch(ApplicationError):
    http_code = 409
    error_code = 7007
    error = "Operation is not available for this tag's claim mode"


class ClaimCodeInvalidFormat(ApplicationError):
    http_code = 422
    error_code = 5006
    error = "Claim code must be 4-128 characters"
