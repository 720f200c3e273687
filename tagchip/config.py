"""Application configuration"""

from dataclasses import dataclass, field
from os import getenv
from pathlib import Path


@dataclass
class Config:
    app_name: str = "tagchip"
    app_version: str = "0.1.0"

    # admin clients (dashboard, provisioning scripts) authenticate with one of these
    api_tokens: list[str] = field(
        default_factory=lambda: [
            t for t in getenv("TAGCHIP_API_TOKENS", "").split(",") if t
        ]
    )

    # Optional database URL for Postgres or other databases
    database_url_env: str | None = field(default=getenv("TAGCHIP_DATABASE_URL", None))

    public_id_length: int = field(
        default=int(getenv("TAGCHIP_PUBLIC_ID_LENGTH", "10"))
    )
    public_id_max_attempts: int = field(
        default=int(getenv("TAGCHIP_PUBLIC_ID_MAX_ATTEMPTS", "5"))
    )

    # endpoint that checks secure_tap proofs (SUN/CMAC messages from the chip)
    secure_tap_verify_url: str | None = field(
        default=getenv("TAGCHIP_SECURE_TAP_VERIFY_URL", "")
    )
    secure_tap_timeout: float = field(
        default=float(getenv("TAGCHIP_SECURE_TAP_TIMEOUT", "5"))
    )

    # seconds between SSE keepalive comments
    events_heartbeat: int = field(
        default=int(getenv("TAGCHIP_EVENTS_HEARTBEAT", "15"))
    )

    @property
    def database_path(self) -> Path:
        return Path("./data/") / Path(f"{self.app_name}.db")

    @property
    def database_url(self) -> str:
        # Use provided DATABASE_URL if available, else fall back to SQLite file
        if self.database_url_env:
            return self.database_url_env
        return f"sqlite:///{self.database_path}"


def get_config():
    return Config()
