from brainly.core.config import DEFAULT_JWT_SECRET, DEFAULT_PORT, Settings


def test_defaults_are_marked_insecure(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("JWT_PASSWORD", "PORT", "REDIS_URL", "CORS_ORIGINS", "TOKEN_EXPIRE_MINUTES"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    assert settings.jwt_secret == DEFAULT_JWT_SECRET
    assert settings.port == DEFAULT_PORT
    assert settings.uses_default_secret
    assert settings.redis_url is None
    assert settings.cors_origins == ["*"]


def test_values_from_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("JWT_PASSWORD", "s3cret")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("TOKEN_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = Settings.from_env()
    assert settings.jwt_secret == "s3cret"
    assert not settings.uses_default_secret
    assert settings.port == 8080
    assert settings.token_expire_minutes == 15
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JWT_PASSWORD", raising=False)
    (tmp_path / ".env").write_text("JWT_PASSWORD=from-dotenv\n")

    settings = Settings.from_env()
    assert settings.jwt_secret == "from-dotenv"
    monkeypatch.delenv("JWT_PASSWORD", raising=False)
