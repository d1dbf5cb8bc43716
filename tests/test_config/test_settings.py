"""Testes para config.settings (MachineSettings)."""

from __future__ import annotations

from pathlib import Path

from config.settings import DEFAULT_PROPERTY_PATH, MachineSettings, get_machine_settings


class TestMachineSettings:
    """Carregamento do ambiente e validação."""

    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "MULTISTATE_PROPERTY_PATH",
            "MULTISTATE_LOG_LEVEL",
            "MULTISTATE_SERVICE_NAME",
            "MULTISTATE_GRAPHS_DIR",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = get_machine_settings()

        assert settings.default_property_path == DEFAULT_PROPERTY_PATH == "state"
        assert settings.log_level == "INFO"
        assert settings.service_name == "multistate"
        assert settings.graphs_dir is None
        assert settings.validate() == []

    def test_environment_overrides(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("MULTISTATE_PROPERTY_PATH", "marking")
        monkeypatch.setenv("MULTISTATE_LOG_LEVEL", "debug")
        monkeypatch.setenv("MULTISTATE_SERVICE_NAME", "orders")
        monkeypatch.setenv("MULTISTATE_GRAPHS_DIR", str(tmp_path))

        settings = get_machine_settings()

        assert settings.default_property_path == "marking"
        assert settings.log_level == "debug"
        assert settings.service_name == "orders"
        assert settings.graphs_dir == Path(tmp_path)
        assert settings.validate() == []

    def test_settings_are_cached(self) -> None:
        assert get_machine_settings() is get_machine_settings()

    def test_validate_reports_errors(self, tmp_path) -> None:
        settings = MachineSettings(
            default_property_path=" ",
            log_level="LOUD",
            service_name="",
            graphs_dir=tmp_path / "missing",
        )

        errors = settings.validate()

        assert len(errors) == 4
        assert "MULTISTATE_LOG_LEVEL inválido: LOUD" in errors
