"""CLI entry-point (Typer).

`run` is the default command: invoking the tool without arguments runs the
challenge once, like a startup hook. Exit codes: 0 on success, 1 on an
integration failure, 2 on invalid configuration or regNo.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

import typer
from rich.console import Console

from adapters.challenge_api import HttpChallengeGateway
from adapters.http_client import build_client
from cli.logging_setup import configure_logging
from cli.ui_components import (
    build_error_panel,
    build_result_table,
    build_selection_table,
    build_settings_table,
    print_banner,
)
from core.config import ENV_PREFIX, ChallengeSettings, load_settings, write_user_env_vars
from core.domain.errors import ChallengeError, IntegrationError, ValidationError
from core.services.challenge_runner import ChallengeRunner
from core.services.sql_selector import describe_selection

EXIT_INTEGRATION = 1
EXIT_VALIDATION = 2

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Generate a challenge webhook, pick the SQL answer and submit it.",
)

_console = Console()
logger = logging.getLogger("cli")


def _exit_code_for(exc: ChallengeError) -> int:
    if isinstance(exc, IntegrationError):
        return EXIT_INTEGRATION
    return EXIT_VALIDATION


def _fail(exc: ChallengeError) -> typer.Exit:
    # El panel es el reporte; el log queda para --log-level DEBUG.
    logger.debug("Run aborted: %s", exc)
    _console.print(build_error_panel(exc))
    return typer.Exit(code=_exit_code_for(exc))


def _load(
    *,
    name: Optional[str],
    reg_no: Optional[str],
    email: Optional[str],
    generate_url: Optional[str],
    timeout: Optional[float] = None,
    log_level: Optional[str] = None,
) -> ChallengeSettings:
    return load_settings(
        name=name,
        reg_no=reg_no,
        email=email,
        generate_url=generate_url,
        http_timeout_seconds=timeout,
        log_level=log_level,
    )


@app.command()
def run(
    name: Optional[str] = typer.Option(None, "--name", help="Overrides user.name."),
    reg_no: Optional[str] = typer.Option(None, "--reg-no", help="Overrides user.regNo."),
    email: Optional[str] = typer.Option(None, "--email", help="Overrides user.email."),
    generate_url: Optional[str] = typer.Option(None, "--generate-url", help="Overrides api.url.generate."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    """Run the challenge once and exit."""

    if banner:
        print_banner(_console)

    try:
        settings = _load(
            name=name,
            reg_no=reg_no,
            email=email,
            generate_url=generate_url,
            timeout=timeout,
            log_level=log_level,
        )
    except ValidationError as exc:
        raise _fail(exc) from exc

    configure_logging(settings.log_level)

    with build_client(settings) as client:
        runner = ChallengeRunner(settings, HttpChallengeGateway(client))
        try:
            result = runner.run()
        except ChallengeError as exc:
            raise _fail(exc) from exc

    _console.print(build_result_table(result))


@app.command(name="select-query")
def select_query_command(
    reg_no: str = typer.Argument(..., help="Registration number to evaluate."),
) -> None:
    """Preview the SQL answer for a regNo without any network call."""

    try:
        selection = describe_selection(reg_no)
    except ValidationError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=EXIT_VALIDATION)

    _console.print(build_selection_table(selection))


@app.command(name="check-config")
def check_config(
    name: Optional[str] = typer.Option(None, "--name"),
    reg_no: Optional[str] = typer.Option(None, "--reg-no"),
    email: Optional[str] = typer.Option(None, "--email"),
    generate_url: Optional[str] = typer.Option(None, "--generate-url"),
) -> None:
    """Show the resolved configuration and the answer it would submit."""

    try:
        settings = _load(name=name, reg_no=reg_no, email=email, generate_url=generate_url)
        selection = describe_selection(settings.reg_no)
    except ValidationError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=EXIT_VALIDATION)

    _console.print(build_settings_table(settings))
    _console.print(build_selection_table(selection))


@app.command()
def setup() -> None:
    """Interactive setup (stores identity in the user config .env).

    Designed for non-Python users: no manual .env editing.
    """

    name = typer.prompt("Name").strip()
    reg_no = typer.prompt("Registration number").strip()
    email = typer.prompt("Email").strip()
    generate_url = typer.prompt("Generate webhook URL").strip()

    if not all((name, reg_no, email, generate_url)):
        raise typer.BadParameter("name, regNo, email and URL are required")

    try:
        describe_selection(reg_no)
    except ValidationError as exc:
        raise typer.BadParameter(exc.message) from exc

    env_path = write_user_env_vars(
        {
            f"{ENV_PREFIX}NAME": name,
            f"{ENV_PREFIX}REG_NO": reg_no,
            f"{ENV_PREFIX}EMAIL": email,
            f"{ENV_PREFIX}GENERATE_URL": generate_url,
        }
    )
    _console.print(f"[green]Saved config to:[/green] {env_path}")


def main(argv: Sequence[str] | None = None) -> None:
    """Process entry-point; with no arguments it behaves like `run`."""

    args = list(sys.argv[1:] if argv is None else argv)
    app(args=args or ["run"], prog_name="healthrx-challenge")
