"""
Copilot client factory module.

Builds a CopilotClient for either an external CLI server or a natively
spawned CLI over stdio, depending on configuration.
"""

from __future__ import annotations

from typing import Any

from copilot import CopilotClient
from raid_agent.models.config import Config


def client_options(config: Config) -> dict[str, Any]:
	"""Return the CopilotClient options for the configured connection mode."""
	if not config.use_native_cli:
		return {"cli_url": config.cli_url, "log_level": config.log_level}
	opts: dict[str, Any] = {"log_level": config.log_level}
	if config.github_token:
		opts["github_token"] = config.github_token
	return opts


def create_client(config: Config) -> CopilotClient:
	"""Factory for CopilotClient with configured connection mode."""
	return CopilotClient(client_options(config))


__all__ = ["create_client", "client_options"]
