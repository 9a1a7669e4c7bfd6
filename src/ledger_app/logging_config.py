"""Console logging for the client, driven by ``ConfigManager``."""
import logging
import sys

from .config_manager import ConfigManager

# ANSI colour per level; levels without an entry print uncoloured
LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',
    logging.INFO: '\033[32m',
    logging.WARNING: '\033[33m',
    logging.ERROR: '\033[31m',
    logging.CRITICAL: '\033[35m',
}
RESET = '\033[0m'

LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)-25s %(message)s'

# Chatty third-party loggers held at WARNING
QUIET_LOGGERS = ('urllib3', 'requests')


class ColorFormatter(logging.Formatter):
    """Wraps the level name in its colour for the duration of one format call."""

    def __init__(self, fmt=LOG_FORMAT, colors=None):
        super().__init__(fmt)
        self.colors = LEVEL_COLORS if colors is None else colors

    def format(self, record):
        color = self.colors.get(record.levelno)
        if not color:
            return super().format(record)
        levelname = record.levelname
        record.levelname = f"{color}{levelname}{RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def resolve_level(name) -> int:
    """Map a level name such as ``'debug'`` to its number, defaulting to INFO."""
    level = logging.getLevelName(str(name or 'INFO').upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(config=None, stream=None):
    """Install a single console handler on the root logger.

    Args:
        config: ``ConfigManager`` supplying ``log_level`` and ``log_colors``;
            a default one is built from the environment when omitted
        stream: Output stream, stdout by default

    Colours are only used when ``log_colors`` is set and the stream is a TTY.
    """
    if config is None:
        config = ConfigManager()
    stream = stream or sys.stdout
    level = resolve_level(config.log_level)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    isatty = getattr(stream, 'isatty', None)
    if config.log_colors and isatty is not None and isatty():
        handler.setFormatter(ColorFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    # Repeated setup replaces the handler
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root.info(f"Client logging initialized (level: {logging.getLevelName(level)})")
    return root
