"""
Centralized logging manager for Fluency-Crew.

This module provides session-based logging with timestamped directories
for each analysis run, with one log file per tool and a session log.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggingManager:
    """Manages session-based logging for tool runs."""

    _instance: Optional["LoggingManager"] = None

    def __init__(self, base_log_dir: str | Path = "logs"):
        """Initialize the logging manager.

        Args:
            base_log_dir: Base directory for all logs
        """
        self.base_log_dir = Path(base_log_dir)
        self.session_id: str | None = None
        self.session_dir: Path | None = None
        self.session_info: dict[str, Any] = {}
        self.loggers: dict[str, logging.Logger] = {}

    @classmethod
    def get_instance(cls) -> "LoggingManager":
        """Get the singleton instance of LoggingManager."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (useful for testing)."""
        cls._instance = None

    def start_session(
        self,
        content_info: str = "",
        command: str = "",
        options: dict[str, Any] | None = None,
    ) -> str:
        """Start a new logging session.

        Args:
            content_info: Short preview of the analyzed article
            command: Tool or CLI command that opened the session
            options: Request options for the run

        Returns:
            Session ID
        """
        now = datetime.now()
        self.session_id = f"session_{now.strftime('%Y-%m-%d_%H-%M-%S')}"

        self.session_dir = self.base_log_dir / self.session_id
        (self.session_dir / "tools").mkdir(parents=True, exist_ok=True)

        self.session_info = {
            "session_id": self.session_id,
            "start_time": now.isoformat(),
            "command": command,
            "content_info": content_info,
            "options": options or {},
            "end_time": None,
            "duration_seconds": None,
        }

        self._save_session_info()
        self._update_latest_symlink()
        self.loggers["session"] = self._file_logger(
            "session", self.session_dir / "session.log"
        )

        return self.session_id

    def end_session(self) -> None:
        """End the current logging session and close its handlers."""
        if self.session_info:
            end_time = datetime.now()
            start_time = datetime.fromisoformat(self.session_info["start_time"])
            self.session_info["end_time"] = end_time.isoformat()
            self.session_info["duration_seconds"] = (
                end_time - start_time
            ).total_seconds()
            self._save_session_info()

        for logger in self.loggers.values():
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)

        self.loggers.clear()

    @property
    def has_active_session(self) -> bool:
        return self.session_dir is not None and "session" in self.loggers

    def get_session_logger(self) -> logging.Logger:
        """Get the session-level logger.

        Raises:
            RuntimeError: If no session is active
        """
        if not self.has_active_session:
            raise RuntimeError("No active logging session. Call start_session() first.")
        return self.loggers["session"]

    def get_tool_logger(self, tool_name: str) -> logging.Logger:
        """Get or create a logger for a specific tool.

        Args:
            tool_name: Name of the tool

        Returns:
            Logger writing to tools/<tool_name>.log in the session directory

        Raises:
            RuntimeError: If no session is active
        """
        if not self.has_active_session or self.session_dir is None:
            raise RuntimeError("No active logging session. Call start_session() first.")

        logger_key = f"tool_{tool_name}"
        if logger_key not in self.loggers:
            safe_tool_name = tool_name.replace(" ", "_").replace("-", "_").lower()
            self.loggers[logger_key] = self._file_logger(
                logger_key, self.session_dir / "tools" / f"{safe_tool_name}.log"
            )
        return self.loggers[logger_key]

    def log_session_event(self, event: str, details: dict[str, Any] | None = None) -> None:
        """Log a session-level event.

        Args:
            event: Event description
            details: Optional additional details
        """
        logger = self.get_session_logger()
        message = event
        if details:
            message += f" - Details: {json.dumps(details, default=str, ensure_ascii=False)}"
        logger.info(message)

    def get_session_dir(self) -> Path | None:
        return self.session_dir

    def get_session_id(self) -> str | None:
        return self.session_id

    def _file_logger(self, name: str, log_file: Path) -> logging.Logger:
        logger = logging.getLogger(f"fluency_crew.{name}")
        logger.setLevel(logging.INFO)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

        # Keep session output out of the root logger
        logger.propagate = False
        return logger

    def _save_session_info(self) -> None:
        if not self.session_dir:
            return

        info_file = self.session_dir / "session_info.json"
        with open(info_file, "w", encoding="utf-8") as f:
            json.dump(self.session_info, f, indent=2, default=str, ensure_ascii=False)

    def _update_latest_symlink(self) -> None:
        """Point logs/latest at the current session."""
        if not self.session_dir or not self.session_id:
            return

        latest_link = self.base_log_dir / "latest"
        if latest_link.is_symlink() or latest_link.exists():
            latest_link.unlink()

        try:
            latest_link.symlink_to(self.session_id)
        except OSError:
            # Symlinks are not available on every filesystem
            pass
