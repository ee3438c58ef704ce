"""Unit tests for ClientSettings and upload contract loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from fixit_client.config.settings import ClientSettings
from fixit_client.config.upload_contracts import (
    BUNDLED_CONTRACTS_PATH,
    UploadContract,
    default_upload_contracts,
    load_upload_contracts,
)


# ---------------------------------------------------------------------------
# ClientSettings
# ---------------------------------------------------------------------------


class TestClientSettings:
    def test_loads_origin_from_env(self):
        settings = ClientSettings()

        assert settings.backend_origin == "https://api.fixit.test"

    def test_defaults_are_correct(self):
        settings = ClientSettings()

        assert settings.api_prefix == "/api"
        assert settings.timeout_seconds == 30.0
        assert settings.admin_override_token is None
        assert settings.login_path == "/login"
        assert settings.logout_on_background_401 is True
        assert settings.session_file is None
        assert settings.upload_contracts_path is None
        assert settings.dashboard_cache_ttl_seconds == 300.0
        assert settings.log_level == "INFO"

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("FIXIT_ADMIN_OVERRIDE_TOKEN", "ADMIN123")
        monkeypatch.setenv("FIXIT_LOGOUT_ON_BACKGROUND_401", "false")
        monkeypatch.setenv("FIXIT_TIMEOUT_SECONDS", "5")

        settings = ClientSettings()

        assert settings.admin_override_token == "ADMIN123"
        assert settings.logout_on_background_401 is False
        assert settings.timeout_seconds == 5.0

    def test_missing_origin_raises(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("FIXIT_BACKEND_ORIGIN", raising=False)

        with pytest.raises(ValidationError):
            ClientSettings()

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError):
            ClientSettings(timeout_seconds=0)

    @pytest.mark.parametrize(
        "origin, prefix, expected",
        [
            ("https://api.fixit.test", "/api", "https://api.fixit.test/api"),
            ("https://api.fixit.test/", "/api", "https://api.fixit.test/api"),
            ("http://localhost:5000", "api/", "http://localhost:5000/api"),
        ],
    )
    def test_base_url_joins_origin_and_prefix(self, origin: str, prefix: str, expected: str):
        settings = ClientSettings(backend_origin=origin, api_prefix=prefix)

        assert settings.base_url == expected


# ---------------------------------------------------------------------------
# Upload contracts
# ---------------------------------------------------------------------------


class TestLoadUploadContracts:
    def test_bundled_file_exists(self):
        assert BUNDLED_CONTRACTS_PATH.exists()

    def test_bundled_table_matches_builtin_defaults(self):
        assert load_upload_contracts() == default_upload_contracts()

    def test_known_field_names(self):
        contracts = load_upload_contracts()

        assert contracts["requests.create"].field_name == "files"
        assert contracts["requests.upload_media"].field_name == "mediaFiles"
        assert contracts["scheduled_maintenance.create"].field_name == "media"
        assert contracts["leases.upload_document"].field_name == "documentFile"
        assert contracts["onboarding.create"].bracket_lists is True

    def test_file_entries_override_defaults(self, tmp_path: Path):
        path = tmp_path / "contracts.yaml"
        path.write_text(
            "operations:\n"
            "  requests.create:\n"
            "    field_name: attachments\n"
            "    max_files: 5\n",
            encoding="utf-8",
        )

        contracts = load_upload_contracts(path)

        assert contracts["requests.create"] == UploadContract(field_name="attachments", max_files=5)
        # Untouched entries keep the built-in values
        assert contracts["requests.upload_media"].field_name == "mediaFiles"

    def test_missing_file_returns_defaults(self, tmp_path: Path):
        contracts = load_upload_contracts(tmp_path / "nope.yaml")

        assert contracts == default_upload_contracts()

    def test_invalid_yaml_returns_defaults(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("operations: [unclosed", encoding="utf-8")

        assert load_upload_contracts(path) == default_upload_contracts()

    def test_missing_operations_key_returns_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("something_else: 1\n", encoding="utf-8")

        assert load_upload_contracts(path) == default_upload_contracts()

    def test_invalid_entry_is_skipped(self, tmp_path: Path):
        path = tmp_path / "contracts.yaml"
        path.write_text(
            "operations:\n"
            "  custom.upload:\n"
            "    field_name: ''\n"
            "  other.upload:\n"
            "    field_name: file\n",
            encoding="utf-8",
        )

        contracts = load_upload_contracts(path)

        assert "custom.upload" not in contracts
        assert contracts["other.upload"].field_name == "file"

    def test_default_copy_is_independent(self):
        contracts = default_upload_contracts()
        contracts.pop("requests.create")

        assert "requests.create" in default_upload_contracts()
