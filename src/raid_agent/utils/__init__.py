"""Shared utility functions.

Key modules:
    - logging: Logging configuration and credential masking
    - protocols: Protocol definitions for dependency injection
    - sysinfo: Host description used as agent context
"""

from .logging import configure_logging, get_logger, sanitize_text
from .protocols import (
    SessionProtocol,
    CopilotClientProtocol,
    InferenceProvider,
    ToolExecutor,
)
from .sysinfo import SystemInfo, collect_system_context

__all__ = [
    # logging
    "configure_logging",
    "get_logger",
    "sanitize_text",
    # protocols
    "SessionProtocol",
    "CopilotClientProtocol",
    "InferenceProvider",
    "ToolExecutor",
    # sysinfo
    "SystemInfo",
    "collect_system_context",
]
