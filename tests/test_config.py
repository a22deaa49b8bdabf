from pydaisy.config import DaisyConfig


def test_defaults():
    cfg = DaisyConfig()
    assert cfg.n_bands == 90
    assert cfg.n_display_bands == 10
    assert cfg.display_band_width == 9
    assert cfg.time_per_update == 0.01
    assert cfg.updates_per_time_unit == 100
    assert cfg.death_rate == 0.3
    assert cfg.clamp_total is True
    assert cfg.diag is False


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("DW_N_BANDS", "30")
    monkeypatch.setenv("DW_DEATH_RATE", "0.25")
    monkeypatch.setenv("DW_DIAG", "1")
    monkeypatch.setenv("DW_CLAMP_TOTAL", "0")
    cfg = DaisyConfig.from_env()
    assert cfg.n_bands == 30
    assert cfg.display_band_width == 3
    assert cfg.death_rate == 0.25
    assert cfg.diag is True
    assert cfg.clamp_total is False


def test_from_env_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("DW_TIME_PER_UPDATE", "fast")
    monkeypatch.setenv("DW_N_BANDS", "many")
    monkeypatch.setenv("DW_DIAG", "yes")
    cfg = DaisyConfig.from_env()
    assert cfg.time_per_update == 0.01
    assert cfg.n_bands == 90
    assert cfg.diag is False


def test_with_overrides_returns_copy():
    cfg = DaisyConfig()
    other = cfg.with_overrides(death_rate=0.1)
    assert other.death_rate == 0.1
    assert cfg.death_rate == 0.3
