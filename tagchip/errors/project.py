"""Project, asset and resource errors"""

from tagchip.errors.base import ApplicationError


class ProjectNameInUse(ApplicationError):
    http_code = 409
    error_code = 6004
    error = "Project name already in use"


class ProjectHasTags(ApplicationError):
    http_code = 409
    error_code = 8001
    error = "Project has tags and can not be deleted"


class AssetIsBusy(ApplicationError):
    http_code = 409
    error_code = 8002
    error = "Asset is bound to some tag(s) or resource(s)"


class RequiredAssetOnPublic(ApplicationError):
    http_code = 422
    error_code = 5007
    error = "required_asset_id is only allowed on private resources"
