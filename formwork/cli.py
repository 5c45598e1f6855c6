"""CLI for rendering and checking described forms."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from formwork import __version__
from formwork.core import RunConfig, from_submission, run_form, view_form
from formwork.core.config import DEFAULT_PREFIX, LOOKUP_TIMEOUT_ENV, PREFIX_ENV
from formwork.core.environment import EnvironmentTimeoutError
from formwork.description import (
    DescriptionError,
    build_form,
    load_description,
    parse_description,
    validate_description,
)
from formwork.io import read_submissions, write_reports
from formwork.report import FormReport, RunStatus, build_report

app = typer.Typer(
    name="formwork",
    help="Render and check declaratively described forms.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"formwork version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output"),
    ] = False,
) -> None:
    """formwork: composable form rendering and validation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


PrefixOption = Annotated[
    str,
    typer.Option("--prefix", "-p", envvar=PREFIX_ENV, help="Field id prefix"),
]


@app.command()
def render(
    description_path: Annotated[
        Path,
        typer.Argument(help="Path to the form description JSON"),
    ],
    prefix: PrefixOption = DEFAULT_PREFIX,
    action: Annotated[
        str,
        typer.Option("--action", help="Action URL of the <form> element"),
    ] = "",
) -> None:
    """Print the fresh HTML form for a description."""
    if not description_path.exists():
        console.print(f"[red]Error:[/red] Description not found: {description_path}")
        raise typer.Exit(1)

    try:
        description = load_description(description_path)
    except DescriptionError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    markup = asyncio.run(view_form(build_form(description, action), prefix))
    console.print(markup, markup=False, highlight=False, soft_wrap=True)


@app.command()
def check(
    description_path: Annotated[
        Path,
        typer.Argument(help="Path to the form description JSON"),
    ],
    input_path: Annotated[
        Path,
        typer.Option("--in", "-i", help="Input JSONL file of submissions"),
    ],
    output_path: Annotated[
        Path | None,
        typer.Option("--out", "-o", help="Output JSONL file for reports"),
    ] = None,
    prefix: PrefixOption = DEFAULT_PREFIX,
    lookup_timeout: Annotated[
        float | None,
        typer.Option(
            "--lookup-timeout",
            envvar=LOOKUP_TIMEOUT_ENV,
            help="Seconds before an input lookup fails",
        ),
    ] = None,
) -> None:
    """Run submissions through a described form and report the outcome."""
    if not description_path.exists():
        console.print(f"[red]Error:[/red] Description not found: {description_path}")
        raise typer.Exit(1)

    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(1)

    try:
        description = load_description(description_path)
    except DescriptionError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        config = RunConfig(lookup_timeout=lookup_timeout)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid lookup timeout: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    form = build_form(description)

    console.print(f"[bold]formwork[/bold] v{__version__}")
    console.print(f"  Form: {description.form_id}")
    console.print(f"  Input: {input_path}")
    if output_path:
        console.print(f"  Output: {output_path}")

    reports: list[FormReport] = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Checking submissions...", total=None)
        try:
            for number, submission in enumerate(read_submissions(input_path), 1):
                _, result = asyncio.run(
                    run_form(form, prefix, from_submission(submission.values), config)
                )
                reports.append(build_report(prefix, result, submission.submission_id))
                progress.update(task, description=f"Checked {number} submissions...")
        except ValueError as e:
            console.print(f"\n[red]Error:[/red] {e}")
            raise typer.Exit(1)
        except EnvironmentTimeoutError as e:
            console.print(f"\n[red]Error:[/red] {e}")
            raise typer.Exit(1)

    failed = [report for report in reports if report.status == RunStatus.FAILED]
    if failed:
        table = Table(title="Errors")
        table.add_column("Submission")
        table.add_column("Field")
        table.add_column("Message")
        for index, report in enumerate(reports, 1):
            for error in report.errors:
                table.add_row(report.submission_id or f"#{index}", error.field or error.start, error.message)
        console.print(table)

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Submissions checked: {len(reports)}")
    console.print(f"  [green]Valid:[/green] {len(reports) - len(failed)}")
    if failed:
        console.print(f"  [red]Invalid:[/red] {len(failed)}")

    if output_path:
        written = write_reports(output_path, reports)
        console.print(f"  Reports written: {written}")


@app.command()
def validate(
    description_path: Annotated[
        Path,
        typer.Argument(help="Path to the form description JSON"),
    ],
) -> None:
    """Validate a form description against its schema."""
    if not description_path.exists():
        console.print(f"[red]Error:[/red] Description not found: {description_path}")
        raise typer.Exit(1)

    with open(description_path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid:[/red] {e}")
            raise typer.Exit(1)

    messages = validate_description(data)
    if messages:
        for message in messages:
            console.print(f"[red]Invalid:[/red] {message}")
        raise typer.Exit(1)

    try:
        parse_description(data)
    except DescriptionError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Valid:[/green] {description_path}")


if __name__ == "__main__":
    app()
