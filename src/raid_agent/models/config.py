from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import Field, field_validator
from pydantic_core.core_schema import ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

if TYPE_CHECKING:
	from .run_params import RunParams


def load_env(env_file: str | Path | None = None) -> None:
	"""Load environment variables from an `.env` file if present."""
	env_path = Path(env_file) if env_file else Path(".env")
	if env_path.exists():
		load_dotenv(env_path)


class Config(BaseSettings):
	"""Runtime configuration loaded from environment variables."""

	model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

	cli_url: str | None = Field(
	    default=None,
	    alias="COPILOT_CLI_URL",
	    description=
	    "External Copilot CLI server URL. If unset, spawns native CLI via stdio.",
	)
	model: str = Field(
	    "Claude Sonnet 4.5",
	    alias="COPILOT_MODEL",
	    description="Model used for inference",
	)
	github_token: str | None = Field(
	    default=None,
	    alias="GITHUB_TOKEN",
	    description="Token passed to the native Copilot CLI for auth",
	)
	max_tool_calls: int = Field(
	    10,
	    alias="MAX_TOOL_CALLS",
	    description="Tool call budget before the agent pauses",
	)
	budget_increment: int | None = Field(
	    default=None,
	    alias="BUDGET_INCREMENT",
	    description=
	    "Extra tool calls granted per continuation (default=max_tool_calls)",
	)
	provider_timeout_seconds: int = Field(
	    300,
	    alias="PROVIDER_TIMEOUT_SECONDS",
	    description="Timeout in seconds for one inference request",
	)
	tool_timeout_seconds: int = Field(
	    30,
	    alias="TOOL_TIMEOUT_SECONDS",
	    description="Timeout in seconds for one diagnostic command",
	)
	known_issues_file: str | None = Field(
	    default=None,
	    alias="KNOWN_ISSUES_FILE",
	    description="YAML file replacing the bundled known-issue catalog",
	)
	enrich_known_issues: bool = Field(
	    True,
	    alias="ENRICH_KNOWN_ISSUES",
	    description="Append matching known issues to the problem statement",
	)
	log_level: str = Field("info", alias="LOG_LEVEL",
	                       description="Log level for app and Copilot client")
	verbose: bool = Field(False, alias="VERBOSE",
	                      description="Show session summary after a run")

	@field_validator("max_tool_calls", "budget_increment",
	                 "provider_timeout_seconds", "tool_timeout_seconds")
	@classmethod
	def validate_positive(cls, v: Any, info: "ValidationInfo") -> Any:
		if v is None:
			return v
		if int(v) <= 0:
			raise ValueError(f"{info.field_name} must be > 0")
		return v

	@property
	def use_native_cli(self) -> bool:
		"""Return True when using native stdio mode (no external server)."""
		return not self.cli_url

	@property
	def effective_budget_increment(self) -> int:
		"""Return the continuation increment, defaulting to the budget."""
		return self.budget_increment or self.max_tool_calls

	def apply_overrides(self, run_params: "RunParams") -> None:
		"""Apply CLI overrides from RunParams onto this config.

		Only non-None fields in run_params are applied, preserving
		environment-based defaults for anything the user didn't explicitly set.

		Parameters:
			run_params: Validated run parameters with optional overrides.
		"""
		_OVERRIDES: list[tuple[str, str]] = [
		    ("max_tool_calls", "max_tool_calls"),
		    ("timeout", "provider_timeout_seconds"),
		    ("verbose", "verbose"),
		]
		for param_field, config_field in _OVERRIDES:
			value = getattr(run_params, param_field)
			if value is not None:
				setattr(self, config_field, value)


__all__ = ["Config", "load_env"]
