"""Profile and profile card errors"""

from tagchip.errors.base import ApplicationError


class UsernameInUse(ApplicationError):
    http_code = 409
    error_code = 6003
    error = "Username is already taken in this project"


class UsernameInvalid(ApplicationError):
    http_code = 422
    error_code = 5005
    error = "Username must be 3-32 characters of letters, digits, '.', '-' or '_'"


class ProfileCardsNotSupported(ApplicationError):
    http_code = 409
    error_code = 8003
    error = "Profile cards exist only in profile_card projects"
