"""Thread-safe logger writing to a handler or to a daily rotating log file."""

import os
import sys
import threading
import time
from enum import IntEnum

CLR_CLR = "\033[0m"
CLR_BLACK = "\033[30m"
CLR_RED = "\033[31m"
CLR_GREEN = "\033[32m"
CLR_YELLOW = "\033[33m"
CLR_BLUE = "\033[34m"
CLR_PURPLE = "\033[35m"
CLR_SKYBLUE = "\033[36m"
CLR_WHITE = "\033[37m"

CLR_BLK_WHT = "\033[40;37m"
CLR_RED_WHT = "\033[41;37m"
CLR_GREEN_WHT = "\033[42;37m"
CLR_YELLOW_WHT = "\033[43;37m"
CLR_BLUE_WHT = "\033[44;37m"
CLR_PURPLE_WHT = "\033[45;37m"
CLR_SKYBLUE_WHT = "\033[46;37m"
CLR_WHT_BLK = "\033[47;30m"

SECONDS_PER_DAY = 86400


class LogLevel(IntEnum):
    """Severity of a log record; records below the logger's level are dropped."""

    VERBOSE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5
    SILENT = 6


_LEVEL_STYLE = {
    LogLevel.DEBUG: ("DEBUG", CLR_WHITE),
    LogLevel.INFO: ("INFO ", CLR_GREEN),
    LogLevel.WARN: ("WARN ", CLR_YELLOW),
    LogLevel.ERROR: ("ERROR", CLR_RED),
    LogLevel.FATAL: ("FATAL", CLR_RED_WHT),
}

DEFAULT_LOG_FILE = "default"
DEFAULT_LOG_LEVEL = LogLevel.VERBOSE
DEFAULT_LOG_REMAIN_DAYS = 1
DEFAULT_LOG_MAX_BUFSIZE = 1 << 14
DEFAULT_LOG_MAX_FILESIZE = 1 << 24

_LOG_SUFFIX = ".log"


def _logfile_name(base, ts):
    tm = time.localtime(ts)
    return "%s-%04d-%02d-%02d.log" % (base, tm.tm_year, tm.tm_mon, tm.tm_mday)


def _remove_quietly(path):
    try:
        os.remove(path)
    except OSError:
        pass


class Logger:
    """Formats records with a timestamp and level tag and delivers them.

    With a ``handler`` each record goes to ``handler(level, text)``; without
    one it is appended to ``<filepath>-YYYY-MM-DD.log``, a new file being
    started each day and files older than ``remain_days`` removed.
    """

    def __init__(self, filepath=DEFAULT_LOG_FILE, level=DEFAULT_LOG_LEVEL, handler=None):
        self.handler = handler
        self.level = level
        self.bufsize = DEFAULT_LOG_MAX_BUFSIZE
        self.enable_color = False
        self.max_filesize = DEFAULT_LOG_MAX_FILESIZE
        self.remain_days = DEFAULT_LOG_REMAIN_DAYS
        self.enable_fsync = True
        self.filepath = DEFAULT_LOG_FILE
        self.current_logfile = None
        self._fp = None
        self._last_logfile_ts = 0
        self._can_write_cnt = 0
        self._gmtoff = time.localtime().tm_gmtoff or 0
        self._lock = threading.RLock()
        self.set_file(filepath)

    def set_file(self, filepath):
        """Use ``filepath`` as the base name of log files; a ``.log`` suffix is dropped."""
        if filepath.endswith(_LOG_SUFFIX):
            filepath = filepath[: -len(_LOG_SUFFIX)]
        self.filepath = filepath

    def log(self, level, fmt, *args):
        """Format and deliver one record.

        Returns the delivered text, or None when ``level`` is below the
        logger's level.
        """
        if level < self.level:
            return None
        label, color = _LEVEL_STYLE.get(level, ("", ""))
        if not self.enable_color:
            color = ""

        seconds, rest = divmod(time.time_ns(), 1_000_000_000)
        tm = time.localtime(seconds)
        header = "%s[%04d-%02d-%02d %02d:%02d:%02d.%03d][%s] " % (
            color,
            tm.tm_year, tm.tm_mon, tm.tm_mday,
            tm.tm_hour, tm.tm_min, tm.tm_sec, rest // 1_000_000,
            label,
        )
        text = header + (fmt % args if args else fmt)
        if self.enable_color:
            text += CLR_CLR
        text = text[: max(0, self.bufsize - 1)]

        with self._lock:
            if self.handler is not None:
                self.handler(level, text)
            else:
                self._write_file(text)
        return text

    def fsync(self):
        """Flush the current log file, if one is open."""
        with self._lock:
            if self._fp is not None:
                self._fp.flush()

    def close(self):
        """Close the current log file; the next record opens it again."""
        with self._lock:
            if self._fp is not None:
                self._fp.close()
                self._fp = None

    def _write_file(self, text):
        fp = self._shift_logfile()
        if fp is None:
            return
        fp.write(text.encode("utf-8"))
        if self.enable_fsync:
            fp.flush()

    def _open_append(self, path):
        try:
            return open(path, "ab")
        except OSError:
            return None

    def _shift_logfile(self):
        now = int(time.time())
        if self._last_logfile_ts == 0:
            interval_days = 0
        else:
            interval_days = (now + self._gmtoff) // SECONDS_PER_DAY - (
                self._last_logfile_ts + self._gmtoff
            ) // SECONDS_PER_DAY

        if self._fp is None or interval_days > 0:
            if self._fp is not None:
                self._fp.close()
                self._fp = None
            else:
                interval_days = 30

            if self.remain_days >= 0:
                if interval_days >= self.remain_days:
                    stale_days = range(interval_days, self.remain_days - 1, -1)
                else:
                    stale_days = (self.remain_days,)
                for days in stale_days:
                    _remove_quietly(_logfile_name(self.filepath, now - days * SECONDS_PER_DAY))

        if self._fp is None:
            self.current_logfile = _logfile_name(self.filepath, now)
            self._fp = self._open_append(self.current_logfile)
            self._last_logfile_ts = now

        if self._fp is not None:
            self._can_write_cnt -= 1
            if self._can_write_cnt < 0:
                self._fp.seek(0, os.SEEK_END)
                filesize = self._fp.tell()
                if filesize > self.max_filesize:
                    self._fp.close()
                    self._fp = None
                    try:
                        open(self.current_logfile, "wb").close()
                    except OSError:
                        return None
                    self._fp = self._open_append(self.current_logfile)
                else:
                    self._can_write_cnt = (self.max_filesize - filesize) // max(1, self.bufsize)

        return self._fp


_default_logger = None
_default_lock = threading.Lock()


def default_logger():
    """The shared process-wide logger, created on first use."""
    global _default_logger
    with _default_lock:
        if _default_logger is None:
            _default_logger = Logger()
        return _default_logger


def stdout_logger(level, text):
    """Handler writing records to standard output."""
    sys.stdout.write(text)


def stderr_logger(level, text):
    """Handler writing records to standard error."""
    sys.stderr.write(text)


def file_logger(level, text):
    """Handler writing records to the default logger's log file."""
    logger = default_logger()
    with logger._lock:
        logger._write_file(text)