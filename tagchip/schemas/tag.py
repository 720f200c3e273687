"""DTO for Tag and TagClaim"""

from datetime import datetime
from typing import Literal

from pydantic import field_validator

from tagchip.errors.tag import UnsupportedClaimMode
from tagchip.models.tag import ClaimMode, TagStatus
from tagchip.schemas.base import (
    BaseFilterSchema,
    BaseReadSchema,
    BaseSchema,
    BaseUpdateSchema,
)


class TagClaimSchema(BaseReadSchema):
    tag_id: int
    claimed_by_profile_id: int
    claimed_at: datetime


class TagSchema(BaseReadSchema):
    public_id: str
    nfc_uid: str
    project_id: int
    asset_id: int | None = None
    claim_mode: ClaimMode
    status: TagStatus


class TagCreateSchema(BaseUpdateSchema):
    project_id: int
    asset_id: int | None = None
    # generated when omitted
    public_id: str | None = None
    nfc_uid: str
    # plain str, so an unknown mode maps to UnsupportedClaimMode instead of a 422
    claim_mode: str = ClaimMode.FIRST_TO_CLAIM.value

    @field_validator("public_id", mode="before")
    @classmethod
    def _strip_public_id(cls, value):
        return value.strip() if isinstance(value, str) else value

    def get_claim_mode(self) -> ClaimMode:
        try:
            return ClaimMode(self.claim_mode)
        except ValueError:
            raise UnsupportedClaimMode(repr(self.claim_mode))


class TagStatusUpdateSchema(BaseSchema):
    # "active" or "disabled", anything else is an invalid transition
    status: str


class TagCodeSchema(BaseSchema):
    code: str


class TagFiltersSchema(BaseFilterSchema):
    project_id: int | None = None
    asset_id: int | None = None
    status: TagStatus | None = None
    claim_mode: ClaimMode | None = None
    public_id: str | None = None
    nfc_uid: str | None = None


class ClaimRequestSchema(BaseSchema):
    profile_id: int
    # claim code (code mode) or tap proof (secure_tap mode)
    proof: str | None = None
    # profile_card projects: the public handle to use if none is set yet
    username: str | None = None


class ClaimResultSchema(BaseSchema):
    status: Literal["claimed"] = "claimed"
    claim: TagClaimSchema


class RedirectSchema(BaseSchema):
    public_id: str
    url: str
    placeholder: bool
