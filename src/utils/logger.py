import inspect
import logging
import os

from pythonjsonlogger import jsonlogger

LOGGER_NAME = "ask_anything"


class Logger(logging.LoggerAdapter):
    """Process-wide JSON logger.

    Keyword arguments passed to the log methods become top-level fields in the
    JSON record, e.g. ``logger.info("Search done", source_count=3)``.
    """

    _instance = None
    _initialized = False

    def __new__(cls) -> "Logger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if Logger._initialized:
            return

        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        log_level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"asctime": "@timestamp", "levelname": "log_level"},
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        base_logger = logging.getLogger(LOGGER_NAME)
        base_logger.setLevel(log_level)
        base_logger.addHandler(handler)
        base_logger.propagate = False

        super().__init__(base_logger)
        Logger._initialized = True

    @staticmethod
    def _caller_location() -> str:
        # Two frames up: the adapter method, then its caller.
        frame = inspect.currentframe()
        caller = frame.f_back.f_back if frame and frame.f_back else None
        if caller is None:
            return "unknown:0"
        return f"{caller.f_code.co_filename}:{caller.f_lineno}"

    def error(self, msg: str, *args: tuple, **kwargs: dict) -> None:
        """Log at ERROR level, tagging the record with the caller's file and line."""
        kwargs["file"] = self._caller_location()
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(
        self, msg: str, *args: tuple, exc_info: bool = True, **kwargs: dict
    ) -> None:
        """Log at ERROR level with the active traceback attached."""
        kwargs["file"] = self._caller_location()
        self.log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        # Everything that is not a logging keyword is forwarded as 'extra'
        result_kwargs = {}
        for key in ("exc_info", "stack_info", "stacklevel"):
            value = kwargs.pop(key, None)
            if value is not None:
                result_kwargs[key] = value
        if kwargs:
            result_kwargs["extra"] = kwargs
        return msg, result_kwargs


logger = Logger()
logger.debug(
    f"Logging level set to {logging.getLevelName(logger.logger.getEffectiveLevel())}"
)
