import logging

from dentchart.core.logs import configure_logging


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging("debug")
    configure_logging("WARNING")

    named = [handler for handler in logger.handlers if handler.get_name() == "dentchart"]
    assert len(named) == 1
    assert logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info() -> None:
    assert configure_logging("chatty").level == logging.INFO
