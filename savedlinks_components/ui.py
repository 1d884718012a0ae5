import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "savedlinks_components"
LOG_FORMAT = "%(asctime)s %(filename)s:%(lineno)d: %(message)s"
LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"


def enable_ansi_colors() -> bool:
    if not sys.stdout.isatty():
        return False
    if os.name != "nt":
        return True
    try:
        import ctypes

        kernel32 = ctypes.windll.kernel32
        handle = kernel32.GetStdHandle(-11)
        mode = ctypes.c_uint()
        if kernel32.GetConsoleMode(handle, ctypes.byref(mode)) == 0:
            return False
        if kernel32.SetConsoleMode(handle, mode.value | 0x0004) == 0:
            return False
        return True
    except Exception:
        return False


_handler: Optional[logging.Handler] = None


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


class TerminalUI:
    RESET = "\033[0m"
    CYAN = "\033[96m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"

    def __init__(self, pretty: bool = True, logger: Optional[logging.Logger] = None):
        self.use_color = pretty and enable_ansi_colors()
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def _color(self, text: str, color: str) -> str:
        if not self.use_color:
            return text
        return f"{color}{text}{self.RESET}"

    def _line(self, level: int, text: str) -> None:
        # caller -> info/ok/warn/error -> _line
        self.logger.log(level, text, stacklevel=3)

    def info(self, msg: str) -> None:
        self._line(logging.INFO, self._color("[INFO]", self.CYAN) + f" {msg}")

    def ok(self, msg: str) -> None:
        self._line(logging.INFO, self._color("[ OK ]", self.GREEN) + f" {msg}")

    def warn(self, msg: str) -> None:
        self._line(logging.WARNING, self._color("[WARN]", self.YELLOW) + f" {msg}")

    def error(self, msg: str) -> None:
        self._line(logging.ERROR, self._color("[FAIL]", self.RED) + f" {msg}")
