from pathlib import Path

import pytest

from raid_agent.models.run_params import RunParams


def test_run_params_valid():
	rp = RunParams(problem="  pods crash looping \n", output="out/report.md")
	assert rp.problem == "pods crash looping"
	assert rp.output == Path("out/report.md")
	assert rp.interactive is True
	assert rp.max_tool_calls is None


def test_run_params_empty_problem():
	with pytest.raises(ValueError):
		RunParams(problem="   ")


@pytest.mark.parametrize("field", ["max_tool_calls", "timeout"])
def test_run_params_positive_ints(field):
	with pytest.raises(ValueError):
		RunParams(problem="x", **{field: 0})
