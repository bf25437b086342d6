import pytest

from morselib import configuration
from morselib.errors import ConfigurationError
from morselib.structures import AudioSettings, DisplayAliases


def test_defaults_without_any_source(isolated_config):
    settings = configuration.get_settings(isolated_config)
    assert settings.MORSE_LANGUAGE == "International"
    assert configuration.display_aliases(settings) == DisplayAliases()
    assert configuration.audio_settings(settings) == AudioSettings()
    assert settings.MORSE_DEBUG is False


def test_environment_overrides(isolated_config, monkeypatch):
    monkeypatch.setenv("MORSE_DOT_ALIAS", "dit")
    monkeypatch.setenv("MORSE_SPEED", "2.5")
    settings = configuration.get_settings(isolated_config)
    assert configuration.display_aliases(settings).dot == "dit"
    assert configuration.audio_settings(settings).speed == pytest.approx(2.5)


def test_dotenv_file(isolated_config):
    (isolated_config / ".env").write_text("MORSE_LINE_ALIAS=dah\nMORSE_FREQUENCY=600\n")
    settings = configuration.get_settings(isolated_config)
    assert settings.MORSE_LINE_ALIAS == "dah"
    assert settings.MORSE_FREQUENCY == pytest.approx(600.0)


def test_language_is_normalised(isolated_config, monkeypatch):
    monkeypatch.setenv("MORSE_LANGUAGE", "  ITU  ")
    assert configuration.get_settings(isolated_config).MORSE_LANGUAGE == "ITU"


def test_unknown_language_is_rejected(isolated_config, monkeypatch):
    monkeypatch.setenv("MORSE_LANGUAGE", "Elvish")
    with pytest.raises(ConfigurationError, match="MORSE_LANGUAGE"):
        configuration.get_settings(isolated_config)


def test_non_positive_speed_is_rejected(isolated_config, monkeypatch):
    monkeypatch.setenv("MORSE_SPEED", "0")
    with pytest.raises(ConfigurationError):
        configuration.get_settings(isolated_config)


def test_settings_are_cached(isolated_config, monkeypatch):
    first = configuration.get_config(isolated_config)
    monkeypatch.setenv("MORSE_DOT_ALIAS", "dit")
    assert configuration.get_config(isolated_config) is first
    configuration.clear_cache()
    assert configuration.get_settings(isolated_config).MORSE_DOT_ALIAS == "dit"


def test_yaml_is_overridden_by_dotenv_then_environment(isolated_config, monkeypatch):
    (isolated_config / "config.yaml").write_text(
        "MORSE_DOT_ALIAS: dit\n"
        "MORSE_LINE_ALIAS: dah\n"
        "MORSE_GAP_ALIAS: _\n"
        "MORSE_FREQUENCY: 500\n",
        encoding="utf-8",
    )
    (isolated_config / ".env").write_text(
        "MORSE_LINE_ALIAS=dash\nMORSE_GAP_ALIAS=|\n", encoding="utf-8"
    )
    monkeypatch.setenv("MORSE_GAP_ALIAS", "/")

    settings = configuration.get_settings(isolated_config)

    assert configuration.display_aliases(settings) == DisplayAliases(
        dot="dit", line="dash", gap="/"
    )
    assert settings.MORSE_FREQUENCY == pytest.approx(500.0)


def test_yaml_without_mapping_root(isolated_config):
    (isolated_config / "config.yaml").write_text("- dit\n- dah\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="expected a mapping"):
        configuration.get_settings(isolated_config)
