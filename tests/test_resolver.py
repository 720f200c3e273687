"""Tests for redirect resolution"""

from datetime import datetime

import pytest

from tagchip.models.project import Project, ProjectType
from tagchip.models.tag import ClaimMode, Tag, TagClaim, TagStatus
from tagchip.resolver import NO_DESTINATION, Resolution, latest_claim, resolve


def make_project(type=ProjectType.PROFILE_CARD, destination_url="https://x.io"):
    return Project(id=1, name="x", type=type, destination_url=destination_url)


def make_tag(status=TagStatus.ACTIVE):
    return Tag(
        id=1,
        public_id="abcd1234",
        nfc_uid="04A23BFF",
        project_id=1,
        claim_mode=ClaimMode.FIRST_TO_CLAIM,
        status=status,
    )


def make_claim(id, profile_id, claimed_at):
    return TagClaim(
        id=id, tag_id=1, claimed_by_profile_id=profile_id, claimed_at=claimed_at
    )


class TestProfileCard:
    def test_active_tag_gets_token_template(self):
        # scenario A
        result = resolve(make_tag(), make_project())
        assert result == Resolution("https://x.io/t/{token}", placeholder=True)

    def test_claimed_with_username(self):
        # scenario B
        claims = [make_claim(1, 7, datetime(2026, 1, 1, 12, 0))]
        result = resolve(make_tag(TagStatus.CLAIMED), make_project(), claims, {7: "maria"})
        assert result == Resolution("https://x.io/p/maria", placeholder=False)

    def test_claimed_without_username(self):
        # scenario C
        claims = [make_claim(1, 7, datetime(2026, 1, 1, 12, 0))]
        result = resolve(make_tag(TagStatus.CLAIMED), make_project(), claims, {7: None})
        assert result == Resolution("https://x.io/p/{username}", placeholder=True)
        result = resolve(make_tag(TagStatus.CLAIMED), make_project(), claims)
        assert result.url == "https://x.io/p/{username}"

    def test_disabled_tag_with_claims_gets_token_template(self):
        # status gates resolution, not claim history
        claims = [make_claim(1, 7, datetime(2026, 1, 1, 12, 0))]
        result = resolve(make_tag(TagStatus.DISABLED), make_project(), claims, {7: "maria"})
        assert result == Resolution("https://x.io/t/{token}", placeholder=True)

    def test_latest_claim_wins(self):
        claims = [
            make_claim(2, 8, datetime(2026, 3, 1)),
            make_claim(1, 7, datetime(2026, 1, 1)),
        ]
        result = resolve(
            make_tag(TagStatus.CLAIMED), make_project(), claims, {7: "old", 8: "new"}
        )
        assert result.url == "https://x.io/p/new"

    def test_same_timestamp_breaks_tie_by_id(self):
        moment = datetime(2026, 1, 1, 12, 0)
        claims = [make_claim(5, 8, moment), make_claim(4, 7, moment)]
        assert latest_claim(claims).id == 5
        assert latest_claim(list(reversed(claims))).id == 5

    def test_username_is_url_quoted(self):
        claims = [make_claim(1, 7, datetime(2026, 1, 1))]
        result = resolve(make_tag(TagStatus.CLAIMED), make_project(), claims, {7: "a b/c"})
        assert result.url == "https://x.io/p/a%20b%2Fc"


class TestOtherProjectTypes:
    @pytest.mark.parametrize(
        "status", [TagStatus.ACTIVE, TagStatus.CLAIMED, TagStatus.DISABLED]
    )
    def test_simple_redirect_ignores_status(self, status):
        project = make_project(ProjectType.SIMPLE_REDIRECT, "https://shop.example/item")
        result = resolve(make_tag(status), project)
        assert result == Resolution("https://shop.example/item", placeholder=False)

    @pytest.mark.parametrize("status", [TagStatus.ACTIVE, TagStatus.CLAIMED])
    def test_exclusive_club_gets_token_template(self, status):
        project = make_project(ProjectType.EXCLUSIVE_CLUB, "https://club.example")
        result = resolve(make_tag(status), project)
        assert result == Resolution("https://club.example/t/{token}", placeholder=True)


class TestDestination:
    @pytest.mark.parametrize("destination_url", [None, "", "   "])
    @pytest.mark.parametrize("type", list(ProjectType))
    def test_no_destination(self, destination_url, type):
        result = resolve(make_tag(), make_project(type, destination_url))
        assert result == Resolution(NO_DESTINATION, placeholder=True)

    def test_trailing_slashes_stripped(self):
        result = resolve(make_tag(), make_project(destination_url="https://x.io//"))
        assert result.url == "https://x.io/t/{token}"

    def test_deterministic(self):
        tag, project = make_tag(TagStatus.CLAIMED), make_project()
        claims = [make_claim(1, 7, datetime(2026, 1, 1))]
        results = {resolve(tag, project, claims, {7: "maria"}) for _ in range(5)}
        assert results == {Resolution("https://x.io/p/maria", False)}
