import os

import pytest

from morselib import configuration


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no config files and no MORSE_* variables in the environment."""

    home = tmp_path / "home"
    workdir = tmp_path / "work"
    home.mkdir()
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for key in list(os.environ):
        if key.startswith("MORSE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(workdir)
    configuration.clear_cache()
    yield workdir
    configuration.clear_cache()
