import logging

from sheets.core.config import Settings
from sheets.core.logging_config import LOGGER_NAME, configure_logging
from sheets import storage
from sheets.storage import FileStorage, MemoryStorage, get_storage, set_storage


def test_settings_defaults(monkeypatch):
    for name in ["ALLOWED_ORIGINS", "DYNAMODB_TABLE_NAME", "SHEET_STORAGE_DIR", "LOG_LEVEL", "DEBUG"]:
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.DYNAMODB_ENABLED is False
    assert settings.AWS_REGION
    assert settings.LOG_LEVEL == "INFO"
    assert settings.DEBUG is False
    assert settings.allowed_origins_list == ["http://localhost:3000", "http://localhost:5173"]


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("DYNAMODB_TABLE_NAME", "sheets")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEBUG", "true")

    settings = Settings()

    assert settings.allowed_origins_list == ["https://a.example", "https://b.example"]
    assert settings.DYNAMODB_ENABLED is True
    assert settings.DYNAMODB_TABLE_NAME == "sheets"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.DEBUG is True


def test_get_storage_defaults_to_files(monkeypatch, tmp_path):
    monkeypatch.setattr(storage.settings, "DYNAMODB_ENABLED", False)
    monkeypatch.setattr(storage.settings, "SHEET_STORAGE_DIR", str(tmp_path / "data"))
    set_storage(None)
    try:
        backend = get_storage()
        assert isinstance(backend, FileStorage)
        assert get_storage() is backend
    finally:
        set_storage(None)


def test_set_storage_override():
    memory = MemoryStorage()
    set_storage(memory)
    try:
        assert get_storage() is memory
    finally:
        set_storage(None)


def test_configure_logging_is_idempotent():
    configure_logging("DEBUG")
    logger = configure_logging("WARNING")

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.WARNING
    tagged = [h for h in logger.handlers if getattr(h, "_sheets_handler", False)]
    assert len(tagged) == 1
