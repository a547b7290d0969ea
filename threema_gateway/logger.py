import logging, json, sys, time, os


def get_logger(name="Threema", level=None, to_file=None):
    """Structured one-line JSON logger shared by every gateway module.

    The level falls back to THREEMA_GATEWAY_LOG_LEVEL (default WARNING) so a
    library import stays quiet unless the application asks for more.
    """
    logger = logging.getLogger(name)
    if level is None:
        level = os.getenv("THREEMA_GATEWAY_LOG_LEVEL", "WARNING").upper()
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(
            fmt=json.dumps({
                "ts": "%(asctime)s",
                "level": "%(levelname)s",
                "logger": "%(name)s",
                "msg": "%(message)s"
            }),
            datefmt="%Y-%m-%dT%H:%M:%SZ",
        )
        formatter.converter = time.gmtime  # UTC

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
