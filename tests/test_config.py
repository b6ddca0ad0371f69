"""Tests for application settings."""

from learnify.config import DEFAULT_MONGODB_URI, Settings


def test_settings_defaults(monkeypatch) -> None:
    for name in (
        "MONGODB_URI",
        "MONGODB_DATABASE",
        "HOST",
        "PORT",
        "UPLOAD_DIR",
        "MAX_UPLOAD_BYTES",
        "OPENAI_API_KEY",
        "OPENAI_MODEL",
        "SOLUTION_STRATEGY",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.mongodb_uri == DEFAULT_MONGODB_URI
    assert settings.mongodb_database is None
    assert settings.port == 5000
    assert settings.max_upload_bytes == 5 * 1024 * 1024
    assert settings.openai_api_key is None
    assert settings.openai_model == "gpt-3.5-turbo"
    assert settings.solution_strategy == "template"


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("MONGODB_URI", "mongodb://db.example:27017/school")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SOLUTION_STRATEGY", "llm")

    settings = Settings(_env_file=None)

    assert settings.mongodb_uri == "mongodb://db.example:27017/school"
    assert settings.port == 8080
    assert settings.solution_strategy == "llm"
