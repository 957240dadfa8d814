from typing import Protocol


class Logger(Protocol):
    """
    Structural type for the loggers accepted by the album library.

    A standard ``logging.Logger`` satisfies it, so does NullLogger. Only the levels the library actually emits are required.
    """
    def debug(self, msg: str, *args, **kwargs) -> None: ...
    def info(self, msg: str, *args, **kwargs) -> None: ...
    def warning(self, msg: str, *args, **kwargs) -> None: ...
    def error(self, msg: str, *args, **kwargs) -> None: ...


class NullLogger:
    """
    Logger that discards every message.

    Used as the default for library classes so scanning stays silent unless the caller injects a real logger.
    """
    def debug(self, msg: str, *args, **kwargs) -> None: pass
    def info(self, msg: str, *args, **kwargs) -> None: pass
    def warning(self, msg: str, *args, **kwargs) -> None: pass
    def error(self, msg: str, *args, **kwargs) -> None: pass
