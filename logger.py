import logging
import os
import sys

# ANSI colors per level name
COLORS = {
    'TRACE': '\033[90m',     # Gray
    'DEBUG': '\033[36m',     # Cyan
    'INFO': '\033[32m',      # Green
    'WARNING': '\033[33m',   # Yellow
    'ERROR': '\033[31m',     # Red
    'CRITICAL': '\033[35m',  # Magenta
    'RESET': '\033[0m',
}

SIMPLE_FORMAT = '%(levelname)s | %(message)s'
VERBOSE_FORMAT = '%(levelname)s | %(filename)s:%(lineno)d | %(message)s'


class ColoredFormatter(logging.Formatter):
    def __init__(self, fmt, use_color=True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record):
        # work on a copy, other handlers may see the same record
        record = logging.makeLogRecord(record.__dict__)
        if self.use_color:
            color = COLORS.get(record.levelname, '')
            record.levelname = f"{color}{record.levelname: <8}{COLORS['RESET']}"
        else:
            record.levelname = f"{record.levelname: <8}"
        return super().format(record)


# Standard levels for reference:
# CRITICAL = 50, ERROR = 40, WARNING = 30, INFO = 20, DEBUG = 10
TRACE = 5  # per-tile layout details

logging.addLevelName(TRACE, 'TRACE')


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, stacklevel=2, **kwargs)


logging.Logger.trace = trace


def _use_color(stream):
    if os.getenv('NO_COLOR'):
        return False
    return hasattr(stream, 'isatty') and stream.isatty()


handler = logging.StreamHandler(sys.stderr)
handler.setFormatter(ColoredFormatter(SIMPLE_FORMAT, _use_color(sys.stderr)))

logger = logging.getLogger('cushionmap')
logger.addHandler(handler)
logger.setLevel('INFO')


def set_verbosity(level):
    """Set log level and format based on verbosity (0=INFO, 1=DEBUG, 2+=TRACE)."""
    use_color = _use_color(handler.stream)
    if level >= 1:
        handler.setFormatter(ColoredFormatter(VERBOSE_FORMAT, use_color))
    else:
        handler.setFormatter(ColoredFormatter(SIMPLE_FORMAT, use_color))

    if level <= 0:
        logger.setLevel('INFO')
    elif level == 1:
        logger.setLevel('DEBUG')
    else:
        logger.setLevel(TRACE)
