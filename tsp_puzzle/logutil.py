import logging

PACKAGE_LOGGER = "tsp_puzzle"
LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def configure_logging(verbosity: int, name: str = PACKAGE_LOGGER) -> logging.Logger:
    """Send the package's log records to stderr; each -v lowers the threshold one step.

    Only the ``name`` logger is touched, so host applications keep their own
    root configuration. Calling again just adjusts the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(LEVELS[min(max(verbosity, 0), len(LEVELS) - 1)])
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s",
                                               datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
