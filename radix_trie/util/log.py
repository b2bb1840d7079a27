import sys
from threading import Lock
from time import strftime
from typing import TextIO


class StreamLogger:
    """ Basic logger class. Writes timestamped lines to pre-opened text streams. Implements basic thread-safety. """

    def __init__(self, *streams:TextIO, time_fmt="[%b %d %Y %H:%M:%S]: ", repeat_mark="*") -> None:
        self._streams = [*streams]       # Writable/appendable text streams for logging.
        self._owned = []                 # Streams opened by this logger, which it must close.
        self._time_fmt = time_fmt        # Format for timestamps using time.strftime. If None, do not add timestamps.
        self._repeat_mark = repeat_mark  # Mark to replace repeated messages. If None, log all messages fully.
        self._last_message = ""          # Most recent unique message string.
        self._lock = Lock()              # Lock to ensure only one thread writes to the streams at a time.

    def add_file(self, filename:str, *, encoding='utf-8') -> None:
        """ Open a text file for appending and log to it until closed. """
        fp = open(filename, 'a', encoding=encoding)
        with self._lock:
            self._streams.append(fp)
            self._owned.append(fp)

    def _format(self, message:str) -> str:
        if self._repeat_mark is not None:
            if message == self._last_message:
                message = self._repeat_mark
            else:
                self._last_message = message
        if self._time_fmt is not None:
            message = strftime(self._time_fmt) + message
        return message + '\n'

    def log(self, message:str) -> None:
        """ Write <message> to every stream with a trailing newline. A failing stream does not stop the others. """
        with self._lock:
            line = self._format(message)
            for stream in self._streams:
                try:
                    # Flush after every write so that messages don't get lost in the buffer on a crash.
                    stream.write(line)
                    stream.flush()
                except (OSError, ValueError):
                    continue

    __call__ = log

    def close(self) -> None:
        """ Close only the files we opened ourselves. System streams stay open. """
        with self._lock:
            for fp in self._owned:
                self._streams.remove(fp)
                fp.close()
            self._owned.clear()


def open_logger(*filenames:str, to_stdout=False, to_stderr=False, **kwargs) -> StreamLogger:
    """ Open a logger that appends to text files and/or prints to system streams. Blank filenames are skipped. """
    streams = []
    if to_stdout:
        streams.append(sys.stdout)
    if to_stderr:
        streams.append(sys.stderr)
    logger = StreamLogger(*streams, **kwargs)
    for f in filenames:
        if f:
            logger.add_file(f)
    return logger
