import logging

LOGGER_NAME = "btc_wallet"


def build_logger(level: str = "INFO") -> logging.Logger:
    """Configure the application's root logger once and return it.

    Module loggers are created with ``logging.getLogger(__name__)`` and
    propagate to the root handler installed here.
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not any(getattr(h, "name", "") == LOGGER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(LOGGER_NAME)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)
    return logger
