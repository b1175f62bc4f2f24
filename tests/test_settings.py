"""Test loading editor settings from TOML."""

import logging

from emed.config import EditorSettings, default_settings_path, load_settings, load_settings_file


def test_defaults():
    settings = load_settings("")
    assert settings == EditorSettings(theme="pink", tab_width=4)


def test_values_override_defaults():
    settings = load_settings('theme = "ocean"\ntab_width = 8\n')
    assert settings.theme == "ocean"
    assert settings.tab_width == 8


def test_tab_width_as_string():
    assert load_settings('tab_width = "2"').tab_width == 2


def test_partial_settings_keep_other_defaults():
    settings = load_settings('tab_width = 3')
    assert settings.theme == "pink"
    assert settings.tab_width == 3


def test_invalid_values_fall_back(caplog):
    with caplog.at_level(logging.WARNING, logger="emed.config"):
        settings = load_settings('theme = 5\ntab_width = 0\n')
    assert settings == EditorSettings()
    assert "Invalid theme" in caplog.text
    assert "Invalid tab_width" in caplog.text


def test_boolean_tab_width_is_rejected():
    assert load_settings('tab_width = true').tab_width == 4


def test_invalid_toml_falls_back(caplog):
    with caplog.at_level(logging.WARNING, logger="emed.config"):
        settings = load_settings('theme = "unterminated')
    assert settings == EditorSettings()
    assert "not valid TOML" in caplog.text


def test_missing_file_gives_defaults(tmp_path):
    assert load_settings_file(tmp_path / "settings.toml") == EditorSettings()


def test_load_settings_file(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text('theme = "ocean"\n', encoding='utf-8')
    assert load_settings_file(path).theme == "ocean"


def test_default_settings_path():
    path = default_settings_path()
    assert path.name == "settings.toml"
    assert "emed" in str(path)
