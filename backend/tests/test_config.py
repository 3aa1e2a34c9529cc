"""
FileNotes: Configuration and CLI Tests
=========================================

What:  Settings validation and command-line argument handling.
Why:   host, port, and storage root are required with no defaults; a
       missing one must stop startup instead of guessing.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError as SettingsValidationError

from filenotes.cli import build_parser, main, settings_from_args
from filenotes.config import Settings
from filenotes.main import create_app
from filenotes.services.note_store import NoteStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's FILENOTES_* variables and .env out of these tests."""
    for var in ("FILENOTES_HOST", "FILENOTES_PORT", "FILENOTES_STORAGE_ROOT", "FILENOTES_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:

    def test_explicit_values(self, tmp_path):
        settings = Settings(host="0.0.0.0", port=9000, storage_root=str(tmp_path / "n"))

        assert settings.host == "0.0.0.0"
        assert settings.port == 9000
        assert settings.log_level == "INFO"
        assert settings.storage_path == (tmp_path / "n").resolve()

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FILENOTES_HOST", "localhost")
        monkeypatch.setenv("FILENOTES_PORT", "8123")
        monkeypatch.setenv("FILENOTES_STORAGE_ROOT", str(tmp_path))

        settings = Settings()

        assert (settings.host, settings.port) == ("localhost", 8123)

    @pytest.mark.parametrize("missing", ["host", "port", "storage_root"])
    def test_required_fields_have_no_defaults(self, missing, tmp_path):
        values = {"host": "h", "port": 8080, "storage_root": str(tmp_path)}
        del values[missing]

        with pytest.raises(SettingsValidationError):
            Settings(**values)

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_range(self, port, tmp_path):
        with pytest.raises(SettingsValidationError):
            Settings(host="h", port=port, storage_root=str(tmp_path))

    def test_log_level_normalized(self, tmp_path):
        settings = Settings(host="h", port=1, storage_root=str(tmp_path), log_level="debug")
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self, tmp_path):
        with pytest.raises(SettingsValidationError):
            Settings(host="h", port=1, storage_root=str(tmp_path), log_level="LOUD")

    def test_create_app_without_configuration_fails(self):
        with pytest.raises(SettingsValidationError):
            create_app()

    def test_create_app_wires_store_to_settings(self, tmp_path):
        settings = Settings(host="h", port=1, storage_root=str(tmp_path / "notes"))
        app = create_app(settings)

        assert app.state.settings is settings
        assert isinstance(app.state.note_store, NoteStore)
        assert app.state.note_store.root == settings.storage_path


class TestCli:

    def test_parses_long_flags(self, tmp_path):
        settings = settings_from_args(
            ["--host", "127.0.0.1", "--port", "8080", "--cache", str(tmp_path)]
        )
        assert settings.host == "127.0.0.1"
        assert settings.port == 8080
        assert settings.storage_root == str(tmp_path)

    def test_parses_short_flags(self, tmp_path):
        settings = settings_from_args(["-H", "::1", "-p", "81", "-c", str(tmp_path)])
        assert (settings.host, settings.port) == ("::1", 81)

    @pytest.mark.parametrize(
        "argv",
        [
            ["--port", "8080", "--cache", "x"],
            ["--host", "h", "--cache", "x"],
            ["--host", "h", "--port", "8080"],
            ["--host", "h", "--port", "eighty", "--cache", "x"],
            ["--host", "h", "--port", "70000", "--cache", "x"],
        ],
    )
    def test_bad_arguments_exit_with_usage_error(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            settings_from_args(argv)
        assert excinfo.value.code == 2

    def test_help_mentions_required_flags(self):
        text = build_parser().format_help()
        for flag in ("--host", "--port", "--cache"):
            assert flag in text

    def test_main_runs_uvicorn_with_configured_address(self, tmp_path):
        with patch("filenotes.cli.uvicorn.run") as mock_run:
            main(["-H", "127.0.0.1", "-p", "8099", "-c", str(tmp_path / "notes")])

        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8099
        assert args[0].state.settings.storage_root == str(tmp_path / "notes")
