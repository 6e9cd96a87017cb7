import copy
import logging
import sys
from pathlib import Path
from typing import List

from .colors import Colors
from .config import SystemConfig
from .structured_logging import JSONFormatter

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ColoredFormatter(logging.Formatter):
    """
    Custom formatter to add colors to log levels and specific messages.
    Highlights parse summaries and dims the per-part chatter.
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.GREY,
        logging.INFO: Colors.BLUE,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED
    }

    def format(self, record):
        # Copy so file handlers sharing the record never see ANSI codes
        record = copy.copy(record)

        color = self.LEVEL_COLORS.get(record.levelno, Colors.RESET)
        record.levelname = f"{color}{record.levelname}{Colors.RESET}"

        if isinstance(record.msg, str):
            if record.msg.startswith("Parsed MIME tree"):
                record.msg = f"{Colors.GREEN}{record.msg}{Colors.RESET}"
            elif record.msg.startswith("Split ") or record.msg.startswith("Partitioned "):
                record.msg = f"{Colors.GREY}{record.msg}{Colors.RESET}"

        return super().format(record)


def configure_logging(system: SystemConfig) -> None:
    """
    Install handlers on the root logger according to ``system``.

    The library modules only ever call ``logging.getLogger(__name__)``;
    this is for applications (and the inspector CLI) that embed them.
    """
    level_name = str(system.log_level).upper()
    level = logging._nameToLevel.get(level_name, logging.INFO)

    if system.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    elif system.log_format == "color" and sys.stderr.isatty():
        formatter = ColoredFormatter(LOG_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    handlers: List[logging.Handler] = [console]

    if system.log_file:
        log_path = Path(system.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(
            JSONFormatter() if system.log_format == "json" else logging.Formatter(LOG_FORMAT)
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    if level_name not in logging._nameToLevel:
        logging.getLogger(__name__).warning(
            "Invalid log level '%s'; defaulting to INFO", system.log_level
        )
