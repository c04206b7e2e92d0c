from logging import FileHandler, Formatter, Logger, StreamHandler, getLogger

from pcpreset.config import LogConfig


def setup(config: LogConfig, force: bool = False):
    """
    Set up logging based on the current configuration.

    The method is idempotent unless `force` is set to True,
    in which case it will reconfigure the logging.
    """

    logger = getLogger("pcpreset")
    if not force and logger.handlers:
        return

    while force and logger.handlers:
        handler = logger.handlers[0]
        logger.removeHandler(handler)
        handler.close()

    level = config.level
    formatter = Formatter(config.format)

    if config.output:
        handler = FileHandler(config.output, encoding="utf-8")
    else:
        handler = StreamHandler()

    handler.setFormatter(formatter)
    handler.setLevel(level)

    logger.setLevel(level)
    logger.addHandler(handler)
    # Keep our records away from whatever the root logger prints
    logger.propagate = False


def get_logger(name) -> Logger:
    """
    Get log function for a given (module) name

    :return: Logger instance
    """
    return getLogger(name)


__all__ = ["setup", "get_logger"]
