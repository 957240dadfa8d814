import logging


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Returns the logger registered under the given name.

    All album browser modules obtain their loggers here so handlers configured by setup_logging apply to them.

    Args:
        name: Optional dotted logger name, usually ``__name__``.

    Returns:
        logging.Logger: Logger instance for the given name.
    """
    return logging.getLogger(name)
