"""
Session logging for Fluency-Crew.

Each CLI run or tool session gets its own timestamped log directory.
"""

from .manager import LoggingManager

__all__ = ["LoggingManager"]
