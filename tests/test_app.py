import pytest
from fastapi.testclient import TestClient

from ideaboard.config import Settings
from ideaboard.database import SessionLocal
from ideaboard.errors import ConfigurationError
from ideaboard.main import create_app
from ideaboard.services.users import authenticate, find_by_username


def test_missing_secret_prevents_startup():
    with pytest.raises(ConfigurationError):
        create_app(Settings(JWT_SECRET=""))


def test_startup_seeds_admin_once():
    app = create_app(Settings(JWT_SECRET="test-secret", ADMIN_PASSWORD="admin-pass"))
    with TestClient(app):
        pass
    with TestClient(app):
        pass

    with SessionLocal() as db:
        admin = find_by_username(db, "admin")
        assert admin is not None
        assert admin.role == "admin"
        assert authenticate(db, "admin", "admin-pass").id == admin.id


def test_openapi_lists_routes(client):
    paths = client.get("/openapi.json").json()["paths"]
    assert "/ideas/{idea_id}/vote" in paths
    assert "/users/{user_id}/role" in paths


def test_create_user_script(capsys):
    from scripts.create_user import main

    assert main(["carol", "--password", "secret1", "--admin"]) == 0
    assert "Created admin user: carol" in capsys.readouterr().out

    assert main(["carol", "--password", "secret1"]) == 1
    assert "already taken" in capsys.readouterr().out
