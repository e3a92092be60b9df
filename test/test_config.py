from unittest.mock import patch

import pytest

from ordbok.config import Settings
from ordbok.constant import DEFAULT_TARGET_LANGUAGE, Language, OpenAIModel


@pytest.fixture(autouse=True)
def no_dotenv():  # type: ignore[no-untyped-def]
    with patch("ordbok.config.load_dotenv"):
        yield


def test_settings_from_environment(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("ORDBOK_MODEL", "gpt-4o")
    monkeypatch.setenv("ORDBOK_STORAGE_DIR", "/tmp/ordbok-test")
    monkeypatch.setenv("ORDBOK_TARGET_LANGUAGE", "german")
    settings = Settings()
    assert settings.api_key == "sk-test"
    assert settings.model == OpenAIModel.GPT_4O
    assert settings.storage_dir == "/tmp/ordbok-test"
    assert settings.target_language == Language.GERMAN


def test_settings_defaults(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    for name in ["ORDBOK_MODEL", "ORDBOK_STORAGE_DIR", "ORDBOK_TARGET_LANGUAGE"]:
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.model == OpenAIModel.GPT_4O_MINI
    assert settings.target_language == DEFAULT_TARGET_LANGUAGE
    assert settings.storage_dir.endswith(".ordbok")


def test_settings_rejects_unknown_language(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setenv("ORDBOK_TARGET_LANGUAGE", "Klingon")
    with pytest.raises(ValueError):
        Settings()
