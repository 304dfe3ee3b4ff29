import logging

from dictee_morph.config import AppConfig
from dictee_morph.logging_config import LOGGER_NAME, setup_logging


def _close_handlers(logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_setup_logging_configures_console_and_file(tmp_path):
    log_file = tmp_path / "dictee.log"
    config = AppConfig(
        log_level="WARNING",
        file_log_level="DEBUG",
        log_dir=str(tmp_path),
        log_file=str(log_file),
        lexicon_assets_dir="",
        lexicon_dump_path="",
        known_words_path="",
    )
    logger = setup_logging(config)
    try:
        assert logger.name == LOGGER_NAME
        assert logger.propagate is False
        levels = sorted(handler.level for handler in logger.handlers)
        assert levels == [logging.DEBUG, logging.WARNING]

        logging.getLogger(f"{LOGGER_NAME}.storage.lexicon_store").debug("child message")
        for handler in logger.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "child message" in content
        assert "lexicon_store" in content

        setup_logging(config)
        assert len(logger.handlers) == 2
    finally:
        _close_handlers(logger)
        _close_handlers(logging.getLogger("py.warnings"))
