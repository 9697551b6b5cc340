"""
Prompt loading utilities.

Provides functions for loading prompt templates from the prompts directory
and substituting placeholders.
"""

from __future__ import annotations

from pathlib import Path
from string import Template

# Prompts directory relative to this module
PROMPTS_DIR = Path(__file__).resolve().parents[1] / "prompts"


def load_prompt(name: str) -> str:
	"""
	Load a prompt file from the prompts directory.

	Parameters:
		name: Filename of the prompt to load.

	Returns:
		Contents of the prompt file.
	"""
	return (PROMPTS_DIR / name).read_text(encoding="utf-8")


def render_prompt(name: str, **values: str) -> str:
	"""
	Load a prompt and substitute ``$placeholders``.

	Unknown placeholders are left in place.

	Parameters:
		name: Filename of the prompt to load.
		values: Placeholder values.

	Returns:
		Rendered prompt text with trailing whitespace removed.
	"""
	return Template(load_prompt(name)).safe_substitute(**values).rstrip()


__all__ = ["PROMPTS_DIR", "load_prompt", "render_prompt"]
