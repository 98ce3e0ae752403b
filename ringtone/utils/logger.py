import logging
import sys

PACKAGE_LOGGER = 'ringtone'


def setup_logger(level=logging.INFO) -> logging.Logger:
    """
    Sends the package's log records to stderr, keeping stdout free for the
    RTTTL text the command line tool prints.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    if logger.hasHandlers():
        logger.handlers.clear()

    logger.setLevel(level)
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    # Debug runs show where each message came from
    if level == logging.DEBUG:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)'
        )
    else:
        formatter = logging.Formatter('%(message)s')

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
