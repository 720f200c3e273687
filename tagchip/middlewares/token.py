"""Admin authentication: checks for a valid API token in request headers"""

from fastapi import Depends, Header

from tagchip.config import Config, get_config
from tagchip.errors.token import TokenInvalid


def get_api_token(
    x_token: str | None = Header(
        default=None,
        description="API token of an admin client (dashboard, provisioning scripts)",
    ),
    config: Config = Depends(get_config),
) -> str:
    if x_token and x_token in config.api_tokens:
        return x_token
    raise TokenInvalid
