"""
Logging for the zoobot decision engine
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATEFMT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None):
    """Configure root logging: stdout, plus a UTF-8 file when log_file is set"""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=handlers,
        force=True,
    )


class DecisionTrace:
    """Per-tick narration of engine decisions, grouped by category"""

    def __init__(self, enabled: bool = True, name: str = "zoobot.trace"):
        self.enabled = enabled
        self.logger = logging.getLogger(name)

    def _emit(self, prefix: str, message: str):
        if self.enabled:
            self.logger.info(f"{prefix} {message}")

    def tick(self, message):
        self._emit("⏱", message)

    def state(self, message):
        """Counters and history"""
        self._emit("📍", message)

    def target(self, message):
        self._emit("🎯", message)

    def item(self, message):
        """Held power-up decisions"""
        self._emit("🧪", message)

    def threat(self, message):
        self._emit("⚠️", message)

    def escape(self, message):
        self._emit("🏃", message)

    def movement(self, message):
        self._emit("➡️", message)
