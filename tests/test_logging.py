import logging

from partyledger.logging import PACKAGE_LOGGER, configure_logging, resolve_level


def test_resolve_level():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(" Warning ") == logging.WARNING
    assert resolve_level("verbose") == logging.INFO


def test_configure_logging_is_idempotent():
    configure_logging("WARNING")
    configure_logging("WARNING", json_output=False)
    configure_logging("WARNING")

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.WARNING
    assert package_logger.propagate is False
