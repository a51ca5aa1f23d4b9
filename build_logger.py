#!/usr/bin/env python3
"""Build logging - console progress plus an optional plain-text log file."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

LEVEL_STYLES = {
    "INFO": "",
    "SUCCESS": "green",
    "WARNING": "yellow",
    "ERROR": "bold red",
}


class BuildLogger:
    """Timestamped console + file logging for a site build"""

    def __init__(self, log_file: Optional[Path] = None, quiet: bool = False,
                 console: Optional[Console] = None):
        self.log_file = Path(log_file) if log_file else None
        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.quiet = quiet
        self.console = console or Console(highlight=False)

        self.start_time = datetime.now()
        self.errors = []
        self.warnings = []

    def log(self, message: str, level: str = "INFO"):
        """Log message with timestamp"""
        timestamp = datetime.now().strftime("%H:%M:%S")

        if not (self.quiet and level in ("INFO", "SUCCESS")):
            style = LEVEL_STYLES.get(level, "")
            text = f"[dim]{timestamp}[/dim] {escape(message)}"
            self.console.print(f"[{style}]{text}[/{style}]" if style else text)

        if self.log_file:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"[{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}] [{level}] {message}\n")

        if level == "ERROR":
            self.errors.append(message)
        elif level == "WARNING":
            self.warnings.append(message)

    def info(self, message: str):
        self.log(message, "INFO")

    def success(self, message: str):
        self.log(message, "SUCCESS")

    def warn(self, message: str):
        self.log(message, "WARNING")

    def error(self, message: str):
        self.log(message, "ERROR")

    def summary(self):
        """Print build summary"""
        duration = datetime.now() - self.start_time
        self.info(f"Duration: {duration}")
        self.info(f"Warnings: {len(self.warnings)}")
        self.info(f"Errors: {len(self.errors)}")
