from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from popgen_hub.core.config import Settings, get_settings, set_settings
from popgen_hub.core.exceptions import ConfigurationError
from popgen_hub.core.types import MoleculeType, WindowStatistic


def test_default_settings():
    settings = Settings()
    assert settings.alignment.gap_char == "-"
    assert settings.alignment.min_sequences == 2
    assert settings.window.statistic is WindowStatistic.DIVERSITY
    assert settings.output.format == "table"
    assert settings.output.per_site is True


def test_yaml_round_trip(tmp_path: Path):
    settings = Settings()
    settings.alignment.gap_char = "."
    settings.output.format = "latex"
    path = tmp_path / "config.yaml"
    settings.to_yaml(path)

    loaded = Settings.from_yaml(path)
    assert loaded.alignment.gap_char == "."
    assert loaded.output.format == "latex"
    assert loaded.alignment.default_molecule_type is MoleculeType.DNA


def test_invalid_yaml_values(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("alignment:\n  gap_char: '--'\n")
    with pytest.raises(ConfigurationError):
        Settings.from_yaml(path)


def test_invalid_molecule_type():
    with pytest.raises(ValidationError):
        Settings(alignment={"default_molecule_type": "lipid"})


def test_single_sequence_minimum_rejected():
    with pytest.raises(ValidationError):
        Settings(alignment={"min_sequences": 1})


def test_environment_override(monkeypatch):
    monkeypatch.setenv("PGHUB_OUTPUT__FORMAT", "json")
    assert Settings().output.format == "json"


def test_load_from_explicit_path(tmp_path: Path):
    path = tmp_path / "custom.yaml"
    path.write_text("window:\n  width: 50\n  step: 5\n")
    settings = Settings.load(path)
    assert settings.window.width == 50
    assert settings.window.step == 5


def test_global_settings():
    custom = Settings(output={"precision": 3})
    set_settings(custom)
    try:
        assert get_settings() is custom
    finally:
        set_settings(None)


def test_window_defaults_build_spec():
    settings = Settings(window={"width": 20, "step": 4, "statistic": "tajima_d"})
    spec = settings.window.to_spec()
    assert (spec.width, spec.step, spec.statistic) == (20, 4, WindowStatistic.TAJIMA_D)


def test_invalid_environment_raises_configuration_error(monkeypatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PGHUB_ALIGNMENT__MIN_SEQUENCES", "1")
    with pytest.raises(ConfigurationError):
        Settings.load()
