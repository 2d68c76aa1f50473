import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError

from create_creator import create_creator

from echovid import main as main_module
from echovid.config import Settings, get_settings
from echovid.errors import Conflict
from echovid.main import create_app
from echovid.models.user import User, UserRole


def test_secret_key_is_required(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_secret_key_rejected():
    with pytest.raises(ValidationError):
        Settings(secret_key="   ", _env_file=None)


def test_unknown_blob_backend_rejected():
    with pytest.raises(ValidationError):
        Settings(secret_key="k", blob_backend="s3", _env_file=None)


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")
    settings = Settings(_env_file=None)
    assert settings.secret_key == "from-env"
    assert settings.access_token_expire_minutes == 15


def test_app_lifespan_builds_and_disposes_database(tmp_path):
    settings = Settings(
        secret_key="k",
        database_url=f"sqlite:///{tmp_path / 'echovid.db'}",
        create_tables=True,
        local_blob_dir=str(tmp_path / "media"),
        _env_file=None,
    )
    app = create_app(settings)
    with TestClient(app) as client:
        assert client.get("/").json() == {"message": "EchoVid API", "docs": "/docs"}
        assert client.get("/getVideos").json() == []
    assert (tmp_path / "echovid.db").exists()


def test_module_level_app_for_uvicorn(tmp_path, monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("LOCAL_BLOB_DIR", str(tmp_path / "media"))
    get_settings.cache_clear()
    try:
        app = main_module.app
        assert isinstance(app, FastAPI)
        assert main_module.app is app
        assert app.state.settings.secret_key == "from-env"
    finally:
        vars(main_module).pop("app", None)
        get_settings.cache_clear()


def test_unknown_module_attribute_still_raises():
    with pytest.raises(AttributeError):
        main_module.application


def test_create_creator_makes_creator_account(database, db):
    user_id = create_creator(database, "Studio", "Studio@Example.com", "long-enough")
    user = db.query(User).filter(User.id == user_id).one()
    assert user.role == UserRole.CREATOR.value
    assert user.email == "studio@example.com"
    with pytest.raises(Conflict):
        create_creator(database, "Studio 2", "studio@example.com", "long-enough")


def test_create_creator_rejects_short_password(database):
    with pytest.raises(ValueError):
        create_creator(database, "Studio", "studio@example.com", "123")
