"""Configuration module for OncoMerge.

Constants are available via: from oncomerge.config.constants import ...
Logging: from oncomerge.config.debug import get_logger, set_log_level
"""

from oncomerge.config.debug import get_logger, set_log_level

__all__ = [
    "get_logger",
    "set_log_level",
]
