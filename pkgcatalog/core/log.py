import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level="WARNING") -> None:
    """
    Configure root logging for the command-line tools.

    Diagnostics go to stderr; user-facing progress is printed to stdout.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    # httpx logs every request at INFO.
    if level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
