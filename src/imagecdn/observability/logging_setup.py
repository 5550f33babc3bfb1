import logging
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def init_logging(settings):
    """
    (Re)build the handlers of the "imagecdn" logger: stderr always, plus a
    rotating file when LOG_FILE is configured. Records do not propagate to the
    root logger, so a host server's own handlers never print them twice.
    """
    logger = logging.getLogger("imagecdn")
    logger.setLevel(settings.log_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(LOG_FORMAT)
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    if settings.log_file:
        fh = RotatingFileHandler(settings.log_file, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    logger.info("Logging ready (level=%s)", settings.log_level)
    return logger
