import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(app):
    """
    Central logging setup so we don't rely on print() anywhere.

    The Flask app is named ``contenthub``, so ``app.logger`` is the parent of
    every module logger in the package (``logging.getLogger(__name__)``).
    Configuring it once here covers request code and the adapters that run
    outside a request alike.
    """
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    for handler in app.logger.handlers:
        handler.setFormatter(formatter)

    app.logger.setLevel(level)
    return app.logger
