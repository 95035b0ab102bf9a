from unittest.mock import Mock

from obskit import logger as obskit_logger
from obskit.config import ObsKitSettings
from obskit.logger import ObsKitStructLogger, get_obskit_logger, init_logger


class TestObsKitStructLogger:

    def test_bind_returns_new_logger(self):
        base = get_obskit_logger()

        bound = base.bind(component="PathValidator")

        assert isinstance(bound, ObsKitStructLogger)
        assert bound is not base
        assert bound.name == "obskit"

    def test_methods_delegate(self):
        inner = Mock()
        log = ObsKitStructLogger("obskit", inner)

        log.info("Registry built", counters=2)
        log.warn("Config path rejected")

        inner.info.assert_called_once_with("Registry built", counters=2)
        inner.warning.assert_called_once_with("Config path rejected")


def test_init_logger_uses_settings(monkeypatch):
    setup = Mock()
    monkeypatch.setattr(obskit_logger, "setup_logging", setup)

    result = init_logger(ObsKitSettings(log_level="debug", json_logs=True))

    setup.assert_called_once_with(json_logs=True, log_level="DEBUG")
    assert isinstance(result, ObsKitStructLogger)
