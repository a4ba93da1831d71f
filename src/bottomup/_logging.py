import logging

LOG_FORMAT = "%(levelname)s(%(funcName)s): %(message)s"


def set_log_level(level: int) -> None:
    """Configure the level of the package-wide ``bottomup`` logger.

    A stream handler is attached the first time this is called, so repeated
    calls only change the level.
    """
    logger = logging.getLogger("bottomup")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
