from astrocore.config import Settings, get_settings


def test_defaults(monkeypatch):
    for name in ("EPHEMERIS_BACKEND", "AUTH_ENABLED", "API_KEYS", "APP_ENV", "LAYOUT_MIN_SEPARATION", "ASPECT_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.ephemeris_backend == "swieph"
    assert s.auth_enabled is False
    assert s.api_keys == []
    assert s.is_dev is True
    assert s.layout_min_separation == 6.0
    assert s.aspect_limit == 8


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EPHEMERIS_BACKEND", " MoSeph ")
    monkeypatch.setenv("AUTH_ENABLED", "TRUE")
    monkeypatch.setenv("API_KEYS", "a, b,,")
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("ASPECT_LIMIT", "3")
    s = Settings.from_env()
    assert s.ephemeris_backend == "moseph"
    assert s.auth_enabled is True
    assert s.api_keys == ["a", "b"]
    assert s.is_dev is False
    assert s.aspect_limit == 3
