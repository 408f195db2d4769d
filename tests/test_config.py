from reelcut.config import DEFAULT_CONFIG, EditorConfig


def test_defaults():
    assert DEFAULT_CONFIG.zoom_default == 20
    assert (DEFAULT_CONFIG.zoom_min, DEFAULT_CONFIG.zoom_max) == (5, 100)
    assert DEFAULT_CONFIG.tick_interval_ms == 100
    assert DEFAULT_CONFIG.tick_step == 0.1


def test_from_env_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # keep a stray .env out of the picture
    monkeypatch.setenv("REELCUT_ZOOM_MAX", "250")
    monkeypatch.setenv("REELCUT_TICK_INTERVAL_MS", "40")
    cfg = EditorConfig.from_env()
    assert cfg.zoom_max == 250.0
    assert cfg.tick_interval_ms == 40
    assert isinstance(cfg.tick_interval_ms, int)
    assert cfg.zoom_min == 5


def test_clamp_zoom():
    assert DEFAULT_CONFIG.clamp_zoom(1000) == 100
    assert DEFAULT_CONFIG.clamp_zoom(1) == 5
