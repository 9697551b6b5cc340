"""User interface components.

This subpackage provides console rendering and report output.

Key modules:
    - console: Rich console for results, prompts and tables
    - reporting: Markdown session reports
"""

from raid_agent.ui.console import ConsoleUI
from raid_agent.ui.reporting import (
    render_report_md,
    render_transcript_md,
    save_report_md,
)

__all__ = [
    "ConsoleUI",
    "render_report_md",
    "render_transcript_md",
    "save_report_md",
]
