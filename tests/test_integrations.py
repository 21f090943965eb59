"""
Tests for the Sentry hooks and the command-line entry point.
"""

import asyncio

import pytest

from onestay import cli
from onestay.config import Settings
from onestay.core.errors import Forbidden, NotFound, SlugAllocationError
from onestay.integrations import sentry
from onestay.integrations.sentry import (
    _filter_events,
    _filter_transactions,
    capture_exception,
    init_sentry,
)
from onestay.storage import Collections, JsonFileMetadataStorage


def exc_info(error):
    return (type(error), error, None)


# =============================================================================
# Sentry
# =============================================================================


class TestSentryFilters:
    def test_credentials_scrubbed(self):
        event = {"request": {"headers": {
            "Authorization": "Bearer abc.def.ghi",
            "bearer": "abc.def.ghi",
            "Cookie": "session=1",
            "Accept": "application/json",
        }}}

        headers = _filter_events(event, {})["request"]["headers"]

        assert headers["Authorization"] == "[Filtered]"
        assert headers["bearer"] == "[Filtered]"
        assert headers["Cookie"] == "[Filtered]"
        assert headers["Accept"] == "application/json"

    @pytest.mark.parametrize("error", [
        NotFound.for_resource("Property"),
        Forbidden("You are not the owner of this resource"),
    ])
    def test_client_errors_dropped(self, error):
        assert _filter_events({"request": {}}, {"exc_info": exc_info(error)}) is None

    @pytest.mark.parametrize("error", [SlugAllocationError(), RuntimeError("boom")])
    def test_server_errors_kept(self, error):
        event = {"level": "error"}

        assert _filter_events(event, {"exc_info": exc_info(error)}) is event

    def test_event_without_request(self):
        assert _filter_events({"message": "hi"}, {}) == {"message": "hi"}

    @pytest.mark.parametrize("path", ["/health", "/api/v1/health"])
    def test_health_transactions_dropped(self, path):
        assert _filter_transactions({"transaction": path}, {}) is None

    def test_other_transactions_kept(self):
        event = {"transaction": "/api/v1/properties/{id_or_slug}"}

        assert _filter_transactions(event, {}) is event

    def test_disabled_without_dsn(self, settings):
        assert init_sentry(settings) is False
        assert capture_exception(RuntimeError("boom")) is None

    def test_transactions_named_by_route_path(self, settings, monkeypatch):
        captured = {}
        monkeypatch.setattr(sentry.sentry_sdk, "init", lambda **kwargs: captured.update(kwargs))
        settings.sentry_dsn = "https://key@sentry.example.com/1"

        assert init_sentry(settings) is True

        styles = [getattr(i, "transaction_style", None) for i in captured["integrations"]]
        assert styles[:2] == ["url", "url"]
        assert captured["before_send_transaction"] is _filter_transactions


# =============================================================================
# CLI
# =============================================================================


@pytest.fixture
def file_settings(tmp_path, monkeypatch):
    """File-backed settings handed to every CLI command."""
    settings = Settings(
        _env_file=None,
        environment="test",
        jwt_secret_key="cli-secret",
        storage_backend="file",
        data_dir=str(tmp_path),
        sentry_dsn="",
    )
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    return settings


def stored(settings, collection):
    async def read():
        store = JsonFileMetadataStorage(f"{settings.data_dir}/documents")
        return await store.query(collection, limit=None)

    return asyncio.run(read())


class TestCli:
    def test_seed_roles(self, file_settings, capsys):
        assert cli.main(["seed-roles"]) == 0
        assert "Seeded 4" in capsys.readouterr().out

        assert cli.main(["seed-roles"]) == 0
        assert "Seeded 0" in capsys.readouterr().out

        assert sorted(r["id"] for r in stored(file_settings, Collections.ROLES)) == ["1", "2", "3", "4"]

    def test_reset_roles_removes_custom(self, file_settings, capsys):
        async def add_custom():
            store = JsonFileMetadataStorage(f"{file_settings.data_dir}/documents")
            await store.save(Collections.ROLES, "5", {"name": "Cleaner", "slug": "cleaner"})

        asyncio.run(add_custom())

        assert cli.main(["reset-roles", "--yes"]) == 0
        assert "4 built-in" in capsys.readouterr().out
        assert sorted(r["id"] for r in stored(file_settings, Collections.ROLES)) == ["1", "2", "3", "4"]

    def test_reset_roles_can_be_aborted(self, file_settings, monkeypatch, capsys):
        cli.main(["seed-roles"])
        monkeypatch.setattr("builtins.input", lambda prompt: "n")

        assert cli.main(["reset-roles"]) == 1
        assert "Aborted" in capsys.readouterr().out

    def test_create_superadmin(self, file_settings, capsys):
        argv = ["create-superadmin", "--email", "Boss@Example.com", "--password", "secret-pw"]

        assert cli.main(argv) == 0
        assert "Created super-admin boss@example.com" in capsys.readouterr().out

        assert cli.main(argv) == 0
        assert "already exists" in capsys.readouterr().out

        users = stored(file_settings, Collections.USERS)
        assert len(users) == 1
        assert users[0]["role_id"] == "4"
        assert len(stored(file_settings, Collections.ROLES)) == 4

    def test_configuration_error_exit_code(self, file_settings, capsys):
        file_settings.storage_backend = "postgres"

        assert cli.main(["seed-roles"]) == 2
        assert "STORAGE_BACKEND" in capsys.readouterr().err

    def test_unknown_command(self, file_settings):
        with pytest.raises(SystemExit):
            cli.main(["explode"])
