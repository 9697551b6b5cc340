import pytest

from raid_agent.models.config import Config, load_env
from raid_agent.models.run_params import RunParams


def test_defaults(monkeypatch):
	for var in ("MAX_TOOL_CALLS", "BUDGET_INCREMENT", "PROVIDER_TIMEOUT_SECONDS",
	            "TOOL_TIMEOUT_SECONDS", "COPILOT_CLI_URL", "ENRICH_KNOWN_ISSUES"):
		monkeypatch.delenv(var, raising=False)
	cfg = Config()
	assert cfg.max_tool_calls == 10
	assert cfg.budget_increment is None
	assert cfg.effective_budget_increment == 10
	assert cfg.provider_timeout_seconds == 300
	assert cfg.tool_timeout_seconds == 30
	assert cfg.enrich_known_issues is True
	assert cfg.use_native_cli


def test_env_aliases(monkeypatch):
	monkeypatch.setenv("MAX_TOOL_CALLS", "4")
	monkeypatch.setenv("BUDGET_INCREMENT", "2")
	monkeypatch.setenv("COPILOT_CLI_URL", "localhost:9000")
	monkeypatch.setenv("ENRICH_KNOWN_ISSUES", "false")
	cfg = Config()
	assert cfg.max_tool_calls == 4
	assert cfg.effective_budget_increment == 2
	assert not cfg.use_native_cli
	assert cfg.enrich_known_issues is False


@pytest.mark.parametrize("field", [
    "MAX_TOOL_CALLS", "BUDGET_INCREMENT", "PROVIDER_TIMEOUT_SECONDS",
    "TOOL_TIMEOUT_SECONDS"
])
def test_positive_fields_reject_zero(field):
	with pytest.raises(ValueError):
		Config(**{field: 0})


def test_apply_overrides_only_set_fields():
	cfg = Config(MAX_TOOL_CALLS=10, PROVIDER_TIMEOUT_SECONDS=300, VERBOSE=False)
	cfg.apply_overrides(RunParams(problem="x", max_tool_calls=3))
	assert cfg.max_tool_calls == 3
	assert cfg.provider_timeout_seconds == 300
	assert cfg.verbose is False

	cfg.apply_overrides(RunParams(problem="x", timeout=60, verbose=True))
	assert cfg.max_tool_calls == 3
	assert cfg.provider_timeout_seconds == 60
	assert cfg.verbose is True


def test_load_env_reads_file(tmp_path, monkeypatch):
	# setenv first so teardown restores the original value
	monkeypatch.setenv("COPILOT_MODEL", "placeholder")
	monkeypatch.delenv("COPILOT_MODEL")
	env = tmp_path / ".env"
	env.write_text("COPILOT_MODEL=from-dotenv\n", encoding="utf-8")
	load_env(env)
	assert Config().model == "from-dotenv"


def test_load_env_missing_file_is_noop(tmp_path):
	load_env(tmp_path / "missing.env")
