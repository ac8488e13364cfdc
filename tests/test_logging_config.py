import logging

from diffgrowth import setup_logging


def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / 'run.log'
    logger = setup_logging(logging.DEBUG, str(log_file))
    logger = setup_logging(logging.DEBUG, str(log_file))

    assert logger.name == 'diffgrowth'
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger('diffgrowth.engine').info("hello from the engine")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from the engine" in log_file.read_text()

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
