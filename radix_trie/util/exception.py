from traceback import format_exception
from types import TracebackType
from typing import Any, Callable, Type


class ExceptionLogger:
    """ Exception handler that writes tracebacks to a string callable. Same signature as sys.excepthook. """

    def __init__(self, logger:Callable[[str], Any], *, max_frames=20) -> None:
        self._logger = logger          # String logger callable. Its return value is ignored.
        self._max_frames = max_frames  # Maximum number of stack frames to write.

    def __call__(self, exc_type:Type[BaseException], exc:BaseException, tb:TracebackType) -> bool:
        """ Write the stack trace to the logger. This does *not* count as handling the exception. """
        tb_lines = format_exception(exc_type, exc, tb, limit=self._max_frames)
        self._logger("".join(tb_lines).rstrip())
        return False

    def log_current(self, exc:BaseException) -> None:
        """ Log an exception caught in an except block. """
        self(type(exc), exc, exc.__traceback__)
