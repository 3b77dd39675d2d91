import logging
import logging.handlers
import re
from pathlib import Path
from typing import Optional

from .config import DemoConfig
from .exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty transport libraries; their debug output is never useful in the demo log
QUIET_LOGGERS = ("httpx", "httpcore", "socketio", "engineio")

MASK = "***MASKED***"


class SensitiveDataFilter(logging.Filter):
    """
    Mask private keys, signatures and tokens before a record is written.
    """
    patterns = [
        (re.compile(r'(private_key=)[\'"]?[^\'"\s]+[\'"]?', re.IGNORECASE), rf'\g<1>{MASK}'),
        (re.compile(r'(token=)[\'"]?[^\'"\s]+[\'"]?', re.IGNORECASE), rf'\g<1>{MASK}'),
        (re.compile(r'(verificationProof[\'"]?\s*[:=]\s*)[\'"]?[^\'"\s,}]+[\'"]?'), rf'\g<1>{MASK}'),
        # 32-byte hex: private keys and signature halves
        (re.compile(r'\b(?:0x)?[0-9a-fA-F]{64}\b'), MASK),
    ]

    def filter(self, record):
        if isinstance(record.msg, str):
            for pattern, replacement in self.patterns:
                record.msg = pattern.sub(replacement, record.msg)
        return True


def _handler(handler: logging.Handler, level: Optional[int] = None) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SensitiveDataFilter())
    if level is not None:
        handler.setLevel(level)
    return handler


def setup_logging(config: Optional[DemoConfig] = None) -> Path:
    """
    Route log records to stderr (warnings and up) and to config.log_file_path.

    The console presenter owns stdout, so the stderr handler stays quiet
    during a healthy run. Calling it again replaces the handlers.
    """
    config = config or DemoConfig()
    log_file = Path(config.log_file_path)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3)
    except OSError as e:
        raise ConfigurationError(f"Cannot write log file {log_file}: {e}")

    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)
    root_logger.handlers = [
        _handler(logging.StreamHandler(), logging.WARNING),
        _handler(file_handler),
    ]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
