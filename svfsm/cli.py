"""CLI entry point for svfsm."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import click

from svfsm import __version__
from svfsm.config.settings import GeneratorConfig, load_config
from svfsm.utils.atomic import AtomicWriteError, atomic_write_text
from svfsm.utils.logging import configure_logging, get_logger
from svfsm.utils.result import ExitCode, FsmError, Result


class Context:
    """CLI context for sharing state between commands."""

    def __init__(
        self,
        config: GeneratorConfig,
        output_path: Optional[Path],
        json_output: bool,
    ) -> None:
        self.config = config
        self.output_path = output_path
        self.json_output = json_output
        self.logger = get_logger("cli")


pass_context = click.make_pass_decorator(Context)


def output_json(data: dict) -> str:
    """Format a JSON envelope."""
    return json.dumps(data, indent=2, default=str) + "\n"


def _write(ctx: Context, text: str) -> None:
    """Send successful output to --output (atomically) or stdout."""
    if ctx.output_path is None:
        click.echo(text, nl=False)
        return

    try:
        atomic_write_text(ctx.output_path, text)
    except AtomicWriteError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.OUTPUT_WRITE_FAILED)

    ctx.logger.info("output_written", path=str(ctx.output_path), bytes=len(text))


def _fail(ctx: Context, error: FsmError) -> NoReturn:
    """Report an input error and exit; nothing reaches --output."""
    if ctx.json_output:
        click.echo(output_json({
            "status": "error",
            "error": error.kind,
            "message": error.message,
        }), nl=False)
    else:
        click.echo(f"Error: {error.message}", err=True)
    sys.exit(error.exit_code)


def _emit(ctx: Context, result: Result[Any, FsmError]) -> None:
    if result.is_err():
        _fail(ctx, result.unwrap_err())

    generation = result.unwrap()
    if ctx.json_output:
        _write(ctx, output_json({
            "status": "success",
            **generation.to_dict(),
            "code": generation.code,
        }))
    else:
        _write(ctx, generation.code)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to YAML config file (default: ./svfsm.yaml if present)",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result to this file instead of stdout",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Emit a JSON envelope instead of bare SystemVerilog",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Reject duplicate state names and colliding transition flags",
)
@click.option(
    "--state-map/--no-state-map",
    default=None,
    help="Prefix advanced-mode output with a numbered state table",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    default=None,
    help="Logging level",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default=None,
    help="Log format",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[Path],
    output_path: Optional[Path],
    json_output: bool,
    strict: Optional[bool],
    state_map: Optional[bool],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """
    SystemVerilog FSM generator - three-block state machine boilerplate.

    Turns a list of states and their transitions into an enum, a packed
    struct of transition flags, two always_comb blocks and an always_ff
    state register. Logs go to stderr; generated code goes to stdout or
    --output.
    """
    result = load_config(config_path)
    if result.is_err():
        click.echo(f"Error: {result.unwrap_err()}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    config = result.unwrap().with_overrides(
        strict=strict,
        include_state_map=state_map,
        log_level=log_level,
        log_format=log_format,
    )

    configure_logging(level=config.logging.level, format_type=config.logging.format)

    ctx.obj = Context(
        config=config,
        output_path=output_path,
        json_output=json_output,
    )


@cli.command()
@click.argument("states")
@pass_context
def fast(ctx: Context, states: str) -> None:
    """Fast mode: every state moves to the next, the last wraps to the first.

    STATES is a ;-separated list, e.g. "IDLE;RUN;DONE".
    """
    from svfsm.generator import generate_fast

    ctx.logger.info("fast_started", strict=ctx.config.strict)
    _emit(ctx, generate_fast(states, ctx.config))


@cli.command()
@click.argument("states")
@click.argument("transitions")
@click.option(
    "--show-mapping",
    is_flag=True,
    default=False,
    help="Print the state numbering to stderr first",
)
@pass_context
def advanced(ctx: Context, states: str, transitions: str, show_mapping: bool) -> None:
    """Advanced mode: explicit transitions by 1-based state number.

    STATES is a ;-separated list and TRANSITIONS a ;-separated list of
    source-target pairs, e.g. "IDLE;RUN;DONE" "1-2;2-3;2-1;3-1".
    Earlier pairs win when several flags of one state are set.
    """
    from svfsm.generator import generate_advanced

    ctx.logger.info("advanced_started", strict=ctx.config.strict)

    result = generate_advanced(states, transitions, ctx.config)
    if show_mapping and result.is_ok():
        click.echo(f"State mapping: {result.unwrap().state_mapping}", err=True)

    _emit(ctx, result)


@cli.command()
@click.argument("source", type=click.File("r"), default="-")
@pass_context
def inline(ctx: Context, source: Any) -> None:
    """Inline mode: read one NAME;src-tgt;... declaration per line.

    SOURCE is a file path, or - for stdin. Either side of a pair may be a
    line number or a declared state name, e.g.

    \b
        IDLE;1-2
        RUN;2-1;RUN-RUN
    """
    from svfsm.generator import generate_inline

    ctx.logger.info("inline_started", source=getattr(source, "name", "-"))
    _emit(ctx, generate_inline(source.read(), ctx.config))


@cli.command(name="states")
@click.argument("states")
@pass_context
def states_command(ctx: Context, states: str) -> None:
    """Validate a state list and print its numbering."""
    from svfsm.parser import parse_state_list

    result = parse_state_list(states)
    if result.is_err():
        _fail(ctx, result.unwrap_err())

    state_list = result.unwrap()
    if ctx.json_output:
        _write(ctx, output_json({
            "status": "success",
            "states": state_list.to_list(),
            "reset_state": state_list.reset_state,
            "mapping": state_list.describe(),
        }))
    else:
        _write(ctx, "\n".join(state_list.mapping()) + "\n")


@cli.command(name="config")
@pass_context
def show_config(ctx: Context) -> None:
    """Show the effective configuration."""
    click.echo(output_json(ctx.config.to_dict()), nl=False)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()
