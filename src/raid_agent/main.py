from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from typer.main import get_command

from raid_agent.core.agent import AgentSession
from raid_agent.core.dispatch import ToolDispatcher
from raid_agent.core.exceptions import KnownIssueNotFound
from raid_agent.integrations.executor import CATALOG, SubprocessToolExecutor
from raid_agent.integrations.known_issues import KnownIssuesDatabase
from raid_agent.integrations.provider import CopilotProvider
from raid_agent.models.agent_result import (
    AgentResult,
    ErrorResult,
    PausedForUserInput,
)
from raid_agent.models.config import Config, load_env
from raid_agent.models.known_issue import IssueCategory
from raid_agent.models.run_params import RunParams
from raid_agent.models.tool import ToolArgs, ToolId
from raid_agent.ui.console import ConsoleUI
from raid_agent.ui.reporting import render_report_md, save_report_md
from raid_agent.utils.logging import configure_logging, get_logger
from raid_agent.utils.protocols import InferenceProvider
from raid_agent.utils.sysinfo import collect_system_context

logger = get_logger(__name__)

cli = typer.Typer(add_completion=False, no_args_is_help=True)
issues_cli = typer.Typer(add_completion=False,
                         no_args_is_help=True,
                         help="Browse the known-issue database.")
cli.add_typer(issues_cli, name="issues")


@cli.callback()
def root() -> None:
	"""
	Root callback for the raid-agent CLI.

	Sets up the Typer application with no-args-is-help behavior.
	"""
	return None


def load_issues_db(config: Config) -> KnownIssuesDatabase:
	"""Load the configured known-issue catalog (bundled by default)."""
	return KnownIssuesDatabase.from_file(config.known_issues_file)


def build_dispatcher(config: Config) -> ToolDispatcher:
	"""Dispatcher over the subprocess executor with the configured timeout."""
	return ToolDispatcher(
	    SubprocessToolExecutor(timeout=config.tool_timeout_seconds))


def build_session(
    config: Config,
    provider: InferenceProvider,
    issues_db: Optional[KnownIssuesDatabase] = None,
) -> AgentSession:
	"""Wire an AgentSession from configuration and collaborators."""
	return AgentSession(
	    provider,
	    build_dispatcher(config),
	    tool_call_budget=config.max_tool_calls,
	    budget_increment=config.effective_budget_increment,
	    enrich=issues_db.enrich if issues_db is not None else None,
	)


async def drive(
    session: AgentSession,
    ui: ConsoleUI,
    problem: str,
    context: str,
    interactive: bool = True,
) -> AgentResult:
	"""
	Run a problem to a final result, prompting the operator on pauses.

	In non-interactive mode the first result is returned as is.

	Parameters:
		session: Session to drive.
		ui: Console used for output and operator prompts.
		problem: Problem statement.
		context: System context for the session.
		interactive: Whether to prompt on pauses.

	Returns:
		The last result produced by the session.
	"""
	with ui.status():
		result = await session.run(problem, context)
	while True:
		ui.show_result(result)
		if result.is_terminal or not interactive:
			return result
		if isinstance(result, PausedForUserInput):
			answer = ui.ask(result.reason)
			if answer is None:
				return result
			with ui.status():
				result = await session.continue_with_input(answer)
		else:
			if not ui.confirm_continue(result, session.budget_increment):
				return result
			with ui.status():
				result = await session.continue_after_limit()


async def run_session(config: Config, params: RunParams,
                      ui: ConsoleUI) -> tuple[AgentResult, AgentSession]:
	"""Open the provider, run the problem and return the final result."""
	context = collect_system_context()
	if params.context:
		context += "\n" + params.context.strip()
	issues_db = load_issues_db(config) if config.enrich_known_issues else None
	async with CopilotProvider(config) as provider:
		session = build_session(config, provider, issues_db)
		result = await drive(session, ui, params.problem, context,
		                     params.interactive)
	return result, session


def run_impl(
    problem: str,
    context: str | None = None,
    max_tool_calls: int | None = None,
    timeout: int | None = None,
    interactive: bool = True,
    verbose: bool | None = None,
    output: Path | None = None,
) -> None:
	"""
	Diagnose a problem with the agent and show the outcome.

	Loads configuration, collects host context, runs the agent loop
	(interactively by default) and optionally saves a markdown report.

	Parameters:
		problem: Free-text problem description.
		context: Extra context appended to the host description.
		max_tool_calls: Override for the tool call budget.
		timeout: Override for the provider timeout in seconds.
		interactive: Whether to prompt on pauses.
		verbose: Whether to print the session summary.
		output: Path for the markdown session report.
	"""
	load_env()
	try:
		params = RunParams(
		    problem=problem,
		    context=context,
		    max_tool_calls=max_tool_calls,
		    timeout=timeout,
		    interactive=interactive,
		    verbose=verbose,
		    output=output,
		)
	except ValidationError as exc:
		raise typer.BadParameter(str(exc)) from exc
	config = Config()
	config.apply_overrides(params)
	configure_logging(config.log_level)
	ui = ConsoleUI()
	ui.console.print(f"[dim]model={config.model}, "
	                 f"max_tool_calls={config.max_tool_calls}, "
	                 f"timeout={config.provider_timeout_seconds}s, "
	                 f"interactive={params.interactive}[/dim]")

	result, session = asyncio.run(run_session(config, params, ui))

	if config.verbose:
		ui.show_summary(session.get_summary())
		if session.tool_usage.total_calls:
			ui.console.print(ui.render_tool_usage_table(session.tool_usage))
	if params.output:
		save_report_md(
		    params.output,
		    render_report_md(params.problem, result, session.get_transcript(),
		                     session.tool_call_budget))
		ui.console.print(f"Report saved to {params.output}")
	if isinstance(result, ErrorResult):
		raise typer.Exit(code=1)


@cli.command()
def run(
    problem: str,
    context: str = typer.Option(None, "--context",
                                help="Extra context for the agent"),
    max_tool_calls: int = typer.Option(None, "--max-tool-calls",
                                       help="Override tool call budget"),
    timeout: int = typer.Option(None, "--timeout",
                                help="Override provider timeout seconds"),
    interactive: bool = typer.Option(
        True,
        "--interactive/--no-interactive",
        help="Prompt for answers and budget continuations",
    ),
    verbose: bool = typer.Option(None, "--verbose",
                                 help="Show session summary"),
    output: Path = typer.Option(None, "--output",
                                help="Save a markdown session report"),
) -> None:
	"""
	Diagnose PROBLEM on this host.

	This is the main CLI command that runs the diagnostic agent.
	"""
	run_impl(problem, context, max_tool_calls, timeout, interactive, verbose,
	         output)


@cli.command()
def tools() -> None:
	"""List the diagnostic tools the agent can run."""
	ui = ConsoleUI()
	ui.console.print(ui.render_tools_table(CATALOG))


@cli.command()
def debug(
    tool: ToolId = typer.Argument(..., help="Catalog tool to run"),
    namespace: str = typer.Option(None, "--namespace", "-n",
                                  help="Kubernetes namespace"),
    pod: str = typer.Option(None, "--pod", "-p", help="Pod name"),
    service: str = typer.Option(None, "--service", "-s",
                                help="systemd service name"),
    lines: int = typer.Option(None, "--lines", "-l", min=0,
                              help="Number of log lines"),
) -> None:
	"""
	Run one diagnostic tool directly, without the agent.

	Exits with status 1 when the tool fails or was not run.
	"""
	load_env()
	config = Config()
	configure_logging(config.log_level)
	args = ToolArgs(namespace=namespace, pod=pod, service=service, lines=lines)
	result = asyncio.run(build_dispatcher(config).dispatch(tool, args))
	ui = ConsoleUI()
	ui.console.print(ui.render_tool_result(result))
	if not result.success:
		raise typer.Exit(code=1)


@issues_cli.command("list")
def issues_list(category: IssueCategory = typer.Option(
    None, "--category", help="Only show this category")) -> None:
	"""List known issues."""
	load_env()
	db = load_issues_db(Config())
	issues = [
	    i for i in db.all_issues() if category is None or i.category == category
	]
	ui = ConsoleUI()
	ui.console.print(ui.render_issues_table(issues))


@issues_cli.command("search")
def issues_search(query: str) -> None:
	"""Search known issues by title, description, keyword or tag."""
	load_env()
	found = load_issues_db(Config()).search_issues(query)
	ui = ConsoleUI()
	if not found:
		ui.console.print(f"No known issues match {query!r}")
		return
	ui.console.print(ui.render_issues_table(found))


@issues_cli.command("get")
def issues_get(issue_id: str) -> None:
	"""Show one known issue in full."""
	load_env()
	try:
		issue = load_issues_db(Config()).get_issue(issue_id)
	except KnownIssueNotFound:
		typer.echo(f"Unknown issue: {issue_id}", err=True)
		raise typer.Exit(code=1)
	ui = ConsoleUI()
	ui.console.print(ui.render_issue(issue))


def entrypoint(argv=None, *, standalone_mode: bool = True):
	"""
	Typer entrypoint that defaults to `run` when appropriate.

	Allows calling 'raid-agent "pods keep restarting"' without
	explicitly specifying the 'run' subcommand.

	Parameters:
		argv: Command-line arguments. Defaults to sys.argv[1:].
		standalone_mode: If True, Click handles exit codes.

	Returns:
		Result of the Click application main invocation.
	"""
	args = sys.argv[1:] if argv is None else list(argv)

	_click_app = get_command(cli)
	commands = getattr(_click_app, "commands", {}).keys()
	# allow optional `run` prefix; default to run when first arg is not a command/option
	if args and args[0] == "run":
		args = args[1:]
	if args and not args[0].startswith("-") and args[0] not in commands:
		args = ["run"] + args
	return _click_app.main(
	    args=args,
	    prog_name="raid-agent",
	    standalone_mode=standalone_mode,
	)


if __name__ == "__main__":
	entrypoint()
