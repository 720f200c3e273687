"""Where does a tag point to right now.

Pure: the result depends only on the arguments, nothing is loaded here.
`RedirectService` gathers the inputs from the database.
"""

from dataclasses import dataclass
from typing import Mapping, Sequence
from urllib.parse import quote

from tagchip.models.project import Project, ProjectType
from tagchip.models.tag import Tag, TagClaim, TagStatus

NO_DESTINATION = "—"
TOKEN_TEMPLATE = "{base}/t/{{token}}"
USERNAME_TEMPLATE = "{base}/p/{{username}}"


@dataclass(frozen=True, slots=True)
class Resolution:
    url: str
    # True when url is a template or "no destination", not a working link
    placeholder: bool


def latest_claim(claims: Sequence[TagClaim]) -> TagClaim | None:
    """Most recent claim by claimed_at (ISO-8601 order), then by id."""
    if not claims:
        return None
    return max(claims, key=lambda c: (c.claimed_at.isoformat(), c.id or 0))


def resolve(
    tag: Tag,
    project: Project,
    claims: Sequence[TagClaim] = (),
    usernames: Mapping[int, str | None] | None = None,
) -> Resolution:
    """
    Args:
        tag: the tag being scanned
        project: the tag's project
        claims: claim rows of this tag, any order
        usernames: profile id -> ProfileCard username within this project
    """
    base = (project.destination_url or "").strip()
    if not base:
        return Resolution(NO_DESTINATION, placeholder=True)
    base = base.rstrip("/")

    match project.type:
        case ProjectType.SIMPLE_REDIRECT:
            return Resolution(base, placeholder=False)
        case ProjectType.PROFILE_CARD if tag.status == TagStatus.CLAIMED:
            claim = latest_claim(claims)
            username = None
            if claim is not None:
                username = (usernames or {}).get(claim.claimed_by_profile_id)
            if username:
                return Resolution(f"{base}/p/{quote(username, safe='')}", False)
            return Resolution(USERNAME_TEMPLATE.format(base=base), placeholder=True)
        case _:
            # per-visit token and session logic lives outside the core
            return Resolution(TOKEN_TEMPLATE.format(base=base), placeholder=True)
