"""Public redirect lookup, hit on every scan"""

from fastapi import APIRouter, Depends

from tagchip.schemas.tag import RedirectSchema
from tagchip.services.redirect import RedirectService

redirect_router = APIRouter(prefix="/redirect", tags=["Redirect"])


@redirect_router.get("/{public_id}", response_model=RedirectSchema)
def resolve_tag(
    public_id: str,
    redirect_service: RedirectService = Depends(),
):
    resolution = redirect_service.resolve(public_id)
    return RedirectSchema(
        public_id=public_id, url=resolution.url, placeholder=resolution.placeholder
    )
