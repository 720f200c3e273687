"""Tests for Project and Asset API"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from tagchip.errors.common import NotFoundError
from tagchip.errors.project import AssetIsBusy, ProjectHasTags, ProjectNameInUse


class TestProjectEndpoints:
    """Test API endpoints"""

    def test_create_project(self, test_app: TestClient):
        response = test_app.post(
            "/projects/",
            json={
                "name": "Business Cards",
                "type": "profile_card",
                "destination_url": "https://x.io",
                "comment": "pilot batch",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == 1
        assert data["name"] == "Business Cards"
        assert data["type"] == "profile_card"
        assert data["destination_url"] == "https://x.io"
        assert data["showroom_mode"] is False
        assert data["comment"] == "pilot batch"

    def test_name_is_unique_ignoring_case(self, test_app: TestClient):
        response = test_app.post(
            "/projects/", json={"name": "business cards", "type": "simple_redirect"}
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error_code"] == ProjectNameInUse.error_code

    def test_invalid_destination_rejected(self, test_app: TestClient):
        response = test_app.post(
            "/projects/",
            json={"name": "Bad", "type": "simple_redirect", "destination_url": "x.io"},
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_patch_project(self, test_app: TestClient):
        response = test_app.patch(
            "/projects/1",
            json={"destination_url": "https://cards.example/", "showroom_mode": True},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["destination_url"] == "https://cards.example/"
        assert data["showroom_mode"] is True
        # type can not be changed
        response = test_app.patch("/projects/1", json={"type": "simple_redirect"})
        assert response.json()["type"] == "profile_card"

    def test_get_non_existent_project_error(self, test_app: TestClient):
        response = test_app.get("/projects/1111")
        assert response.status_code == 418
        data = response.json()
        assert data["error_code"] == NotFoundError.error_code
        assert "not found" in data["error"].lower()

    def test_filters(self, test_app: TestClient):
        test_app.post("/projects/", json={"name": "Club", "type": "exclusive_club"})
        response = test_app.get("/projects/", params={"type": "exclusive_club"})
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["name"] == "Club"
        response = test_app.get("/projects/", params={"name": "card"})
        assert [p["name"] for p in response.json()["items"]] == ["Business Cards"]


class TestAssetEndpoints:
    @pytest.fixture(scope="class")
    def projects(self, test_app: TestClient):
        first = test_app.post(
            "/projects/", json={"name": "Sneakers", "type": "exclusive_club"}
        ).json()
        second = test_app.post(
            "/projects/", json={"name": "Posters", "type": "simple_redirect"}
        ).json()
        return first, second

    def test_create_asset(self, test_app: TestClient, projects):
        first, _ = projects
        response = test_app.post(
            "/assets/",
            json={"project_id": first["id"], "name": "Drop #1", "type": "unique"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["project_id"] == first["id"]
        assert data["type"] == "unique"

    def test_default_type_is_generic(self, test_app: TestClient, projects):
        _, second = projects
        response = test_app.post(
            "/assets/", json={"project_id": second["id"], "name": "Poster"}
        )
        assert response.json()["type"] == "generic"

    def test_unknown_project(self, test_app: TestClient):
        response = test_app.post("/assets/", json={"project_id": 999, "name": "x"})
        assert response.json()["error_code"] == NotFoundError.error_code

    def test_filter_by_project(self, test_app: TestClient, projects):
        first, _ = projects
        response = test_app.get("/assets/", params={"project_id": first["id"]})
        assert [a["name"] for a in response.json()["items"]] == ["Drop #1"]


class TestDeletePolicy:
    @pytest.fixture(scope="class")
    def project(self, test_app: TestClient):
        return test_app.post(
            "/projects/", json={"name": "Disposable", "type": "simple_redirect"}
        ).json()

    def test_delete_project_with_assets(self, test_app: TestClient, project):
        asset = test_app.post(
            "/assets/", json={"project_id": project["id"], "name": "leftover"}
        ).json()
        response = test_app.delete(f"/projects/{project['id']}")
        assert response.status_code == 200
        assert response.json() == project["id"]
        # assets go with the project
        response = test_app.get(f"/assets/{asset['id']}")
        assert response.json()["error_code"] == NotFoundError.error_code

    def test_project_with_tags_is_kept(self, test_app: TestClient):
        project = test_app.post(
            "/projects/", json={"name": "Tagged", "type": "simple_redirect"}
        ).json()
        asset = test_app.post(
            "/assets/", json={"project_id": project["id"], "name": "bound"}
        ).json()
        test_app.post(
            "/tags/",
            json={
                "project_id": project["id"],
                "asset_id": asset["id"],
                "nfc_uid": "04:00:00:01",
            },
        )

        response = test_app.delete(f"/projects/{project['id']}")
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error_code"] == ProjectHasTags.error_code

        response = test_app.delete(f"/assets/{asset['id']}")
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error_code"] == AssetIsBusy.error_code

    def test_delete_free_asset(self, test_app: TestClient):
        project = test_app.post(
            "/projects/", json={"name": "Free", "type": "simple_redirect"}
        ).json()
        asset = test_app.post(
            "/assets/", json={"project_id": project["id"], "name": "free"}
        ).json()
        response = test_app.delete(f"/assets/{asset['id']}")
        assert response.status_code == 200
        response = test_app.get(f"/assets/{asset['id']}")
        assert response.json()["error_code"] == NotFoundError.error_code


class TestProjectCustomers:
    @pytest.fixture(scope="class")
    def setup(self, test_app: TestClient):
        project = test_app.post(
            "/projects/",
            json={
                "name": "Club Cards",
                "type": "profile_card",
                "destination_url": "https://club.io",
            },
        ).json()
        other = test_app.post(
            "/projects/",
            json={
                "name": "Other Cards",
                "type": "profile_card",
                "destination_url": "https://other.io",
            },
        ).json()
        card_only = test_app.post("/profiles/", json={"display_name": "Card"}).json()
        claimer = test_app.post("/profiles/", json={"display_name": "Claimer"}).json()
        owner = test_app.post(
            "/profiles/", json={"display_name": "Owner", "role": "owner"}
        ).json()
        stranger = test_app.post("/profiles/", json={"display_name": "Else"}).json()

        test_app.put(
            f"/profiles/{card_only['id']}/cards/{project['id']}",
            json={"username": "card.only"},
        )
        test_app.put(
            f"/profiles/{owner['id']}/cards/{project['id']}", json={"username": "shop"}
        )
        for nfc_uid in ["05:00:01", "05:00:02"]:
            tag = test_app.post(
                "/tags/", json={"project_id": project["id"], "nfc_uid": nfc_uid}
            ).json()
            test_app.post(
                f"/claims/{tag['public_id']}",
                json={"profile_id": claimer["id"], "username": "claimer"},
            )
        tag = test_app.post(
            "/tags/", json={"project_id": other["id"], "nfc_uid": "05:00:03"}
        ).json()
        test_app.post(f"/claims/{tag['public_id']}", json={"profile_id": stranger["id"]})
        return project, other, card_only, claimer, stranger

    def test_card_holders_and_claimants(self, test_app: TestClient, setup):
        project, _, card_only, claimer, _ = setup
        response = test_app.get(f"/projects/{project['id']}/customers")
        assert response.status_code == 200
        data = response.json()
        # newest profile first, owners are left out
        assert [c["profile"]["id"] for c in data] == [claimer["id"], card_only["id"]]
        assert [c["username"] for c in data] == ["claimer", "card.only"]
        assert [c["claims_count"] for c in data] == [2, 0]

    def test_claim_only_customer(self, test_app: TestClient, setup):
        # a simple_redirect project gives no cards, claims alone relate customers
        _, _, _, claimer, _ = setup
        project = test_app.post(
            "/projects/", json={"name": "Links", "type": "simple_redirect"}
        ).json()
        tag = test_app.post(
            "/tags/", json={"project_id": project["id"], "nfc_uid": "05:00:04"}
        ).json()
        test_app.post(f"/claims/{tag['public_id']}", json={"profile_id": claimer["id"]})

        data = test_app.get(f"/projects/{project['id']}/customers").json()
        assert len(data) == 1
        assert data[0]["profile"]["id"] == claimer["id"]
        assert data[0]["username"] is None
        assert data[0]["claims_count"] == 1

    def test_scoped_to_project(self, test_app: TestClient, setup):
        _, other, _, _, stranger = setup
        data = test_app.get(f"/projects/{other['id']}/customers").json()
        assert [c["profile"]["id"] for c in data] == [stranger["id"]]

    def test_empty_project(self, test_app: TestClient):
        project = test_app.post(
            "/projects/", json={"name": "Empty", "type": "simple_redirect"}
        ).json()
        response = test_app.get(f"/projects/{project['id']}/customers")
        assert response.json() == []

    def test_unknown_project(self, test_app: TestClient):
        response = test_app.get("/projects/999/customers")
        assert response.json()["error_code"] == NotFoundError.error_code
