"""Test configuration and shared fixtures"""

import os
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from tagchip.app import app
from tagchip.config import Config, get_config
from tagchip.db import DatabaseConnection
from tagchip.services.asset import AssetService
from tagchip.services.claim import ClaimService
from tagchip.services.claim_code import ClaimCodeService
from tagchip.services.profile import ProfileService
from tagchip.services.project import ProjectService
from tagchip.services.redirect import RedirectService
from tagchip.services.secure_tap import SecureTapVerifier
from tagchip.services.tag import TagService

TEST_TOKEN = "valid-token-000"


@pytest.fixture(scope="class")
def test_config():
    return Config(
        # overwrite application name so it will use another database file
        app_name="tagchip-test",
        # pass a list of valid test tokens
        api_tokens=[TEST_TOKEN],
        secure_tap_verify_url="https://verify.example.test/sun",
    )


# each test class have it's own empty database
@pytest.fixture(scope="class")
def test_app(test_config: Config):
    app.dependency_overrides = {get_config: lambda: test_config}
    db_conn = DatabaseConnection(test_config)
    db_conn.create_tables()
    db_conn.dispose()
    # pass valid token for all requests
    client = TestClient(app, headers={"x-token": TEST_TOKEN})
    yield client
    app.dependency_overrides = {}
    # clean up test database file after tests
    if os.path.exists(test_config.database_path):
        os.remove(test_config.database_path)


@pytest.fixture(scope="class")
def anonymous_app(test_app: TestClient):
    """Same app and database, no admin token"""
    return TestClient(app)


@pytest.fixture
def session_factory(test_app: TestClient, test_config: Config):
    """Independent sessions on the test database, closed after the test"""
    db_conn = DatabaseConnection(test_config)
    sessions = []

    def make_session():
        session = db_conn.get_session()
        sessions.append(session)
        return session

    yield make_session
    for session in sessions:
        session.close()
    db_conn.dispose()


@pytest.fixture
def services(test_config: Config):
    """Wire the services by hand around one session, the way Depends() does"""

    def build(session) -> SimpleNamespace:
        projects = ProjectService(db=session)
        tags = TagService(db=session, project_service=projects, config=test_config)
        profiles = ProfileService(db=session)
        codes = ClaimCodeService(db=session, tag_service=tags)
        return SimpleNamespace(
            projects=projects,
            assets=AssetService(db=session, project_service=projects),
            tags=tags,
            profiles=profiles,
            codes=codes,
            claims=ClaimService(
                db=session,
                tag_service=tags,
                profile_service=profiles,
                code_service=codes,
                secure_tap_verifier=SecureTapVerifier(config=test_config),
            ),
            redirects=RedirectService(db=session, tag_service=tags),
        )

    return build
