"""Resource loaders for bundled prompt templates."""

from raid_agent.loaders.prompts import PROMPTS_DIR, load_prompt, render_prompt

__all__ = ["PROMPTS_DIR", "load_prompt", "render_prompt"]
