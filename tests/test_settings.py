from todo_api.settings import get_settings


def test_defaults(monkeypatch):
    for name in ("DATABASE_URL", "HOST", "PORT", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "INIT_SCHEMA"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.database_url == "sqlite:///./data/todos.db"
    assert s.host == "0.0.0.0"
    assert s.port == 3000
    assert s.cors_allow_origins == ["*"]
    assert s.log_level == "INFO"
    assert s.init_schema is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://localhost/todos")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("INIT_SCHEMA", "yes")
    s = get_settings()
    assert s.database_url == "postgresql://localhost/todos"
    assert s.port == 8080
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.log_level == "DEBUG"
    assert s.init_schema is True


def test_bad_port_falls_back(monkeypatch):
    monkeypatch.setenv("PORT", "http")
    assert get_settings().port == 3000
