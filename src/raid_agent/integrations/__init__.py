"""External service integrations.

This subpackage provides the collaborators the agent loop consumes.

Key modules:
    - provider: Copilot SDK inference provider
    - executor: Subprocess tool executor and command catalog
    - known_issues: YAML-backed known-issue database
"""

from raid_agent.integrations.provider import CopilotProvider
from raid_agent.integrations.executor import (
    CATALOG,
    CatalogEntry,
    SubprocessToolExecutor,
    build_argv,
)
from raid_agent.integrations.known_issues import KnownIssuesDatabase, load_issues

__all__ = [
    # provider
    "CopilotProvider",
    # executor
    "CATALOG",
    "CatalogEntry",
    "SubprocessToolExecutor",
    "build_argv",
    # known_issues
    "KnownIssuesDatabase",
    "load_issues",
]
