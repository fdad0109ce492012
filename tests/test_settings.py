import json

from asset_renamer.settings import Settings, default_settings_path, load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "none.json"))
    assert settings == Settings()
    assert settings.column_widths == [150, 130]


def test_round_trip(tmp_path):
    path = str(tmp_path / "s.json")
    save_settings(Settings(column_widths=[200, 90], last_folder="/assets", output_mode="custom",
                           output_path="/export"), path)
    loaded = load_settings(path)
    assert loaded.column_widths == [200, 90]
    assert loaded.output_mode == "custom"
    assert loaded.output_path == "/export"


def test_broken_file_gives_defaults(tmp_path):
    path = tmp_path / "s.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(str(path)) == Settings()


def test_bad_values_are_replaced(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({"column_widths": ["wide"], "output_mode": "cloud", "extra": 1}), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings.column_widths == [150, 130]
    assert settings.output_mode == "original"


def test_env_var_overrides_location(tmp_path, monkeypatch):
    target = str(tmp_path / "custom.json")
    monkeypatch.setenv("ASSET_RENAMER_SETTINGS", target)
    assert default_settings_path() == target
