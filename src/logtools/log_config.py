from pathlib import Path
import logging.config


def get_logging_config(dir_output: str, base_file: str) -> dict:
    """Generates the logging configuration dictionary for the album browser.

    Creates the output directory if it does not exist. Records go as JSON lines to a rotating
    file and as readable text to stderr.

    Args:
        dir_output: Directory where log files will be stored.
        base_file: Name of the log file.

    Returns:
        dict: Logging configuration dictionary compatible with logging.config.dictConfig.
    """
    path_output = Path(dir_output)
    path_output.mkdir(parents=True, exist_ok=True)

    path_json = path_output / base_file

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": "%(asctime)s %(levelname)s %(name)s %(message)s %(module)s %(funcName)s %(threadName)s",
                "class": "pythonjsonlogger.json.JsonFormatter",
            },
            "plain": {
                "format": "%(levelname)s: %(message)s | %(name)s",
            },
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
                "level": "WARNING",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "json",
                "filename": str(path_json),
                "maxBytes": 204800,
                "backupCount": 10,
                "encoding": "utf-8",
            },
        },
        "loggers": {"": {"handlers": ["stderr", "file"], "level": "WARNING"}},
    }


def setup_logging(dir_output: str, base_file: str, log_level: str = "INFO") -> None:
    """Configures the root logger once per process.

    Repeated calls are ignored so a host application and the command line entry can both call it.

    Args:
        dir_output: Directory where log files will be stored.
        base_file: Name of the log file.
        log_level: Logging level to set for the root logger.

    Returns:
        None
    """
    root = logging.getLogger()

    if getattr(root, "_configured_by_album_browser", False):
        return

    for h in root.handlers[:]:
        root.removeHandler(h)

    config = get_logging_config(dir_output=dir_output, base_file=base_file)
    logging.config.dictConfig(config)

    root.setLevel(log_level.upper())
    root._configured_by_album_browser = True
