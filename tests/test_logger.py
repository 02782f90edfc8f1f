import logging

from trailblazer.utils.logger import HANDLER_NAME, configure_logging, redact_sensitive


def test_redact_sensitive_masks_credentials():
    event = {"event": "login", "username": "tess", "password": "hunter22", "api_key": "sk-123456"}
    redacted = redact_sensitive(None, "info", event)
    assert redacted["username"] == "tess"
    assert redacted["password"] == "***"
    assert redacted["api_key"] == "***"


def test_redact_sensitive_leaves_empty_values():
    assert redact_sensitive(None, "info", {"event": "x", "token": None}) == {"event": "x", "token": None}


def test_configure_logging_installs_one_handler():
    configure_logging("WARNING", json_logs=False)
    configure_logging("WARNING", json_logs=True)
    root = logging.getLogger()
    assert [h.get_name() for h in root.handlers].count(HANDLER_NAME) == 1
    assert root.level == logging.WARNING


def test_startup_banner_never_prints_the_secret(caplog, settings):
    from trailblazer.main import log_configuration

    settings = settings.model_copy(
        update={"secret_key": "s3cr3t-signing-key", "openai_api_key": "sk-live-abcdef"}
    )
    with caplog.at_level(logging.INFO, logger="trailblazer.main"):
        log_configuration(settings)

    assert "SECRET_KEY: ***" in caplog.text
    assert "OPENAI_API_KEY: ***" in caplog.text
    assert "WEATHER_API_KEY: <unset>" in caplog.text
    assert "s3cr" not in caplog.text
    assert "sk-l" not in caplog.text
