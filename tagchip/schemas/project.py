"""DTO for Project"""

from typing import Annotated

from pydantic import AfterValidator, HttpUrl, TypeAdapter, ValidationError

from tagchip.models.project import ProjectType
from tagchip.schemas.base import BaseFilterSchema, BaseReadSchema, BaseUpdateSchema

_http_url = TypeAdapter(HttpUrl)


def _check_destination(value: str | None) -> str | None:
    """Empty means "no destination yet", anything else must be an http(s) url."""
    if value is None:
        return None
    value = value.strip()
    if value:
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError("must be a valid http(s) URL")
    return value


DestinationUrl = Annotated[str | None, AfterValidator(_check_destination)]


class ProjectSchema(BaseReadSchema):
    name: str
    description: str | None = None
    type: ProjectType
    destination_url: str | None = None
    showroom_mode: bool


class ProjectCreateSchema(BaseUpdateSchema):
    name: str
    description: str | None = None
    type: ProjectType
    destination_url: DestinationUrl = None
    showroom_mode: bool = False


class ProjectUpdateSchema(BaseUpdateSchema):
    """No `type` here: changing the type of a project is not supported."""

    name: str | None = None
    description: str | None = None
    destination_url: DestinationUrl = None
    showroom_mode: bool | None = None


class ProjectFiltersSchema(BaseFilterSchema):
    name: str | None = None
    type: ProjectType | None = None
