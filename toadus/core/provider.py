import inspect
import logging.config
import typing as t

from toadus.lib.logging import TRACE, TraceLogLevelLogger


def trace(msg: str, *args: t.Any, **kwargs: t.Any):
    if len(logging.root.handlers) == 0:
        logging.basicConfig()
    logging.root.log(TRACE, msg, *args, **kwargs)


class LoggingProvider(object):
    """Configures `logging` from the `logging` settings section when the container starts."""

    def __init__(self, config: dict[str, t.Any], debug: bool):
        LoggingProvider.create_trace_loglevel()
        logging.config.dictConfig(config)
        if debug:
            self.capture_warnings(True)

    @staticmethod
    def create_trace_loglevel():
        """
        Create a log level TRACE = 5
        """
        logging.setLoggerClass(TraceLogLevelLogger)
        logging.addLevelName(TRACE, "TRACE")
        logging.TRACE = TRACE  # pyright: ignore [reportAttributeAccessIssue]
        logging.trace = trace  # pyright: ignore [reportAttributeAccessIssue]

    @staticmethod
    def get_logger(name: str | None = None, n_frames: int = 1) -> logging.Logger:
        """The named logger, or the logger of the calling module."""
        if name is None:
            name = inspect.stack()[n_frames].frame.f_globals["__name__"]
        return logging.getLogger(name)

    @staticmethod
    def capture_warnings(capture: bool):
        logging.captureWarnings(capture)
