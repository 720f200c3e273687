"""DTO for Profile and ProfileCard"""

from tagchip.models.profile import ProfileRole
from tagchip.schemas.base import (
    BaseFilterSchema,
    BaseReadSchema,
    BaseSchema,
    BaseUpdateSchema,
)


class ProfileCardSchema(BaseReadSchema):
    profile_id: int
    project_id: int
    username: str | None = None


class ProfileSchema(BaseReadSchema):
    role: ProfileRole
    display_name: str | None = None
    email: str | None = None
    cards: list[ProfileCardSchema] = []


class ProfileCreateSchema(BaseUpdateSchema):
    role: ProfileRole = ProfileRole.CUSTOMER
    display_name: str | None = None
    email: str | None = None


class ProfileUpdateSchema(BaseUpdateSchema):
    display_name: str | None = None
    email: str | None = None


class ProfileFiltersSchema(BaseFilterSchema):
    role: ProfileRole | None = None
    email: str | None = None
    display_name: str | None = None


class ProfileCardUpdateSchema(BaseUpdateSchema):
    username: str


class ProjectCustomerSchema(BaseSchema):
    """A customer related to a project through a card or a claim"""

    profile: ProfileSchema
    username: str | None = None
    claims_count: int = 0
