"""Typer application and CLI entry point for restdsl.

Commands:

* ``restdsl generate SOURCE`` -- load an OpenAPI document and write the
  REST DSL for its operations as fluent DSL source, YAML, JSON, or the raw
  event stream.
* ``restdsl operations SOURCE`` -- list the document's operations and
  whether the active filter accepts them.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`restdsl.config`: Configuration precedence resolution.
    :mod:`restdsl.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Any, Optional

import typer
from rich.logging import RichHandler

from restdsl import __version__
from restdsl.exceptions import InvalidUsageError, RestDslError
from restdsl.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="restdsl",
    help="Generate REST DSL routes from Swagger 2.0 and OpenAPI 3.x documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


class DslFormat(str, Enum):
    """Output formats of ``restdsl generate``."""

    DSL = "dsl"
    YAML = "yaml"
    JSON = "json"
    EVENTS = "events"


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"restdsl {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route ``restdsl.*`` log records to stderr through Rich."""
    from restdsl.output import get_output

    logger = logging.getLogger("restdsl")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(
        RichHandler(
            console=get_output().stderr_console,
            show_time=False,
            show_path=False,
        )
    )
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output for listings."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output for listings."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~restdsl.output.OutputManager` and the log
    handler from CLI flags.
    """
    from restdsl.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )
    _configure_logging(verbose)


@contextmanager
def _exit_on_error() -> Iterator[None]:
    """Report a :class:`~restdsl.exceptions.RestDslError` and exit with its code."""
    from restdsl.output import error

    try:
        yield
    except RestDslError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _render(generator: Any, fmt: DslFormat) -> tuple[str, Any]:  # noqa: ANN401
    """Run *generator* into the sink for *fmt*; return ``(text, report)``."""
    import json

    from restdsl.emitter import RecordingEmitter, RouteModelEmitter, SourceEmitter

    if fmt == DslFormat.DSL:
        source = SourceEmitter()
        report = generator.generate(source)
        return source.render(), report
    if fmt == DslFormat.EVENTS:
        recorder = RecordingEmitter()
        report = generator.generate(recorder)
        return json.dumps(recorder.to_records(), indent=2, ensure_ascii=False), report

    model = RouteModelEmitter()
    report = generator.generate(model)
    return (model.to_yaml() if fmt == DslFormat.YAML else model.to_json()), report


@app.command("generate")
def generate_command(
    source: str = typer.Argument(
        ..., help="OpenAPI document: file path, http(s) URL, or '-' for stdin."
    ),
    filter_: Optional[str] = typer.Option(
        None,
        "--filter",
        "-f",
        help="Comma-separated operation id patterns (exact, wildcard, or regex).",
    ),
    destination: Optional[str] = typer.Option(
        None,
        "--destination",
        "-d",
        help="Destination template, e.g. 'direct:{operation_id}'.",
    ),
    output_format: Optional[DslFormat] = typer.Option(
        None, "--format", help="Output format."
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write to this file instead of stdout."
    ),
    component: Optional[str] = typer.Option(
        None, "--component", help="REST component for restConfiguration."
    ),
    context_path: Optional[str] = typer.Option(
        None, "--context-path", help="Context path for restConfiguration."
    ),
    api_context_path: Optional[str] = typer.Option(
        None, "--api-context-path", help="API doc context path for restConfiguration."
    ),
    host: Optional[str] = typer.Option(
        None, "--host", help="Host name for restConfiguration."
    ),
    continue_on_error: Optional[bool] = typer.Option(
        None,
        "--continue-on-error/--fail-fast",
        help="Skip operations that cannot be generated instead of aborting.",
    ),
) -> None:
    """Generate the REST DSL for every operation of an OpenAPI document.

    Example::

        restdsl generate petstore.yaml --filter 'get*' -o PetRoutes.java
        restdsl generate https://example.com/openapi.json --format yaml
    """
    from restdsl.config import resolve_config
    from restdsl.generator import RestDslGenerator
    from restdsl.output import get_output, info, warning
    from restdsl.parser import load_spec

    with _exit_on_error():
        config = resolve_config(
            {
                "filter": filter_,
                "destination": destination,
                "format": output_format.value if output_format else None,
                "continue_on_error": continue_on_error,
                "rest": {
                    "component": component,
                    "context_path": context_path,
                    "api_context_path": api_context_path,
                    "host": host,
                },
            }
        )
        try:
            fmt = DslFormat(config.format)
        except ValueError:
            choices = ", ".join(f.value for f in DslFormat)
            raise InvalidUsageError(
                f"Unknown output format '{config.format}' (choose from {choices})"
            ) from None

        document = load_spec(source)
        generator = RestDslGenerator.from_config(document, config)
        text, report = _render(generator, fmt)
        get_output().write_result(text, output_file)

    for label, message in report.failed:
        warning(f"Skipped {label}: {message}")
    info(
        f"Generated {len(report.emitted)} operation(s)"
        + (f", filtered {len(report.filtered)}" if report.filtered else "")
        + (f" into {output_file}" if output_file else "")
    )


@app.command("operations")
def operations_command(
    source: str = typer.Argument(
        ..., help="OpenAPI document: file path, http(s) URL, or '-' for stdin."
    ),
    filter_: Optional[str] = typer.Option(
        None, "--filter", "-f", help="Comma-separated operation id patterns."
    ),
) -> None:
    """List the operations of a document and whether the filter accepts them."""
    from restdsl.config import resolve_config
    from restdsl.generator import OperationFilter
    from restdsl.output import get_output
    from restdsl.parser import detect_version, iter_operations, load_spec

    with _exit_on_error():
        config = resolve_config({"filter": filter_})
        document = load_spec(source)
        version = detect_version(document)
        operation_filter = OperationFilter(config.filter)

        rows: list[list[str]] = []
        for method, operation in iter_operations(document, version):
            rows.append([
                method.value.upper(),
                operation.path,
                operation.operation_id or "-",
                "yes" if operation_filter.accept(operation.operation_id) else "no",
            ])

    info_object = document.get("info")
    title = (info_object.get("title") if isinstance(info_object, dict) else None) or "API"
    get_output().print_table(
        ["Method", "Path", "Operation", "Included"],
        rows,
        title=f"{title} -- Operations ({len(rows)})",
    )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from restdsl.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``restdsl`` console script.

    :class:`~restdsl.exceptions.RestDslError` instances that escape a command
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from restdsl.output import error

        if isinstance(exc, RestDslError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
