"""Public claim endpoint, hit by the tap-to-claim page"""

from fastapi import APIRouter, Depends

from tagchip.schemas.tag import ClaimRequestSchema, ClaimResultSchema, TagClaimSchema
from tagchip.services.claim import ClaimService

claim_router = APIRouter(prefix="/claims", tags=["Claims"])


@claim_router.post("/{public_id}", response_model=ClaimResultSchema)
def claim_tag(
    public_id: str,
    request: ClaimRequestSchema,
    claim_service: ClaimService = Depends(),
):
    claim = claim_service.claim(public_id, request)
    return ClaimResultSchema(claim=TagClaimSchema.model_validate(claim))
