"""Command-line interface for OncoMerge.

ARCHITECTURE:
    JSON files / cBioPortal → MutationCollection (called, uncalled) → merge / gates

Commands:
    oncomerge merge CALLED_JSON [--uncalled PATH] [--output PATH]
    oncomerge cosmic CALLED_JSON [--uncalled PATH] [--api-url URL]
    oncomerge studies STUDY_ID... [--api-url URL]
    oncomerge version

Logging:
    --log-level  Set log level (DEBUG, INFO, WARN, ERROR). Default: INFO
    Environment: ONCOMERGE_LOG_LEVEL=DEBUG|INFO|WARN|ERROR
"""

import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from oncomerge.api.cbioportal import CBioPortalClient
from oncomerge.config.constants import CBIOPORTAL_API_URL_ENV_VAR
from oncomerge.config.debug import get_logger, set_log_level
from oncomerge.errors import OncoMergeError
from oncomerge.gates import fetch_cosmic_data
from oncomerge.merge import merge_mutations_including_uncalled
from oncomerge.models.collection import MutationCollection
from oncomerge.models.mutation import Mutation
from oncomerge.studies import make_study_to_cancer_type_map

load_dotenv()

app = typer.Typer(
    name="oncomerge",
    help="Merge called and uncalled cancer mutations into canonical groups",
    add_completion=False,
)

console = Console()


def _load_collection(path: Path | None) -> MutationCollection:
    """Read a JSON array of cBioPortal mutations into a complete collection."""
    if path is None:
        return MutationCollection.complete()
    if not path.exists():
        console.print(f"[red]Error: Input file not found: {path}[/red]")
        raise typer.Exit(1)

    try:
        with open(path, "r") as f:
            data = json.load(f)
        records = [Mutation.model_validate(item) for item in data]
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        console.print(f"[red]Error loading mutations from {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    return MutationCollection.complete(records)


def _apply_log_level(log_level: str) -> None:
    try:
        set_log_level(log_level)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _group_rows(groups: list[list[Mutation]]) -> Table:
    table = Table(title=f"{len(groups)} mutation groups")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Mutation", style="bold")
    table.add_column("Kind")
    table.add_column("Records", justify="right")

    for idx, group in enumerate(groups, 1):
        first = group[0]
        table.add_row(
            str(idx),
            first.label(),
            first.to_variant().kind,
            str(len(group)),
        )
    return table


@app.command()
def merge(
    called: Path = typer.Argument(..., help="JSON file with called mutations"),
    uncalled: Optional[Path] = typer.Option(None, "--uncalled", "-u", help="JSON file with uncalled mutations"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file for groups"),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level: DEBUG, INFO, WARN, ERROR"),
) -> None:
    """Group called and uncalled mutations that describe the same event.

    Examples:
        oncomerge merge called.json
        oncomerge merge called.json --uncalled uncalled.json -o groups.json
    """
    _apply_log_level(log_level)
    logger = get_logger(__name__)

    called_data = _load_collection(called)
    uncalled_data = _load_collection(uncalled)
    logger.debug(f"Loaded {len(called_data)} called and {len(uncalled_data)} uncalled mutations")

    try:
        groups = merge_mutations_including_uncalled(called_data, uncalled_data)
    except OncoMergeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(_group_rows(groups))

    if output:
        output_data = [
            [m.model_dump(mode="json", by_alias=True, exclude_none=True) for m in group]
            for group in groups
        ]
        with open(output, "w") as f:
            json.dump(output_data, f, indent=2)
        console.print(f"[green]Saved {len(groups)} groups to {output}[/green]")


@app.command()
def cosmic(
    called: Path = typer.Argument(..., help="JSON file with called mutations"),
    uncalled: Optional[Path] = typer.Option(None, "--uncalled", "-u", help="JSON file with uncalled mutations"),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", envvar=CBIOPORTAL_API_URL_ENV_VAR, help="cBioPortal API root"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file for counts"),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level: DEBUG, INFO, WARN, ERROR"),
) -> None:
    """Fetch COSMIC counts for mutations that carry a keyword.

    Nothing is fetched when no mutation has a keyword.

    Example:
        oncomerge cosmic called.json --uncalled uncalled.json
    """
    _apply_log_level(log_level)

    called_data = _load_collection(called)
    uncalled_data = _load_collection(uncalled)

    async def run_cosmic() -> None:
        async with CBioPortalClient(base_url=api_url) as client:
            try:
                counts = await fetch_cosmic_data(called_data, uncalled_data, client)
            except OncoMergeError as e:
                console.print(f"[red]Error: {escape(str(e))}[/red]")
                raise typer.Exit(1)

        if counts is None:
            console.print("[yellow]Skipped: no mutation carries a COSMIC keyword[/yellow]")
            return

        table = Table(title=f"{len(counts)} COSMIC counts")
        table.add_column("Keyword")
        table.add_column("COSMIC ID")
        table.add_column("Protein change")
        table.add_column("Count", justify="right")
        for count in counts:
            table.add_row(
                count.keyword or "",
                count.cosmic_mutation_id or "",
                count.protein_change or "",
                str(count.count),
            )
        console.print(table)

        if output:
            with open(output, "w") as f:
                json.dump([c.model_dump(mode="json", by_alias=True) for c in counts], f, indent=2)
            console.print(f"[green]Saved to {output}[/green]")

    asyncio.run(run_cosmic())


@app.command()
def studies(
    study_ids: List[str] = typer.Argument(..., help="cBioPortal study ids"),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", envvar=CBIOPORTAL_API_URL_ENV_VAR, help="cBioPortal API root"
    ),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Log level: DEBUG, INFO, WARN, ERROR"),
) -> None:
    """Print the cancer type of each study.

    Example:
        oncomerge studies msk_impact_2017 brca_tcga_pan_can_atlas_2018
    """
    _apply_log_level(log_level)

    async def run_studies() -> dict[str, str]:
        async with CBioPortalClient(base_url=api_url) as client:
            return make_study_to_cancer_type_map(await client.fetch_studies(study_ids))

    try:
        study_map = asyncio.run(run_studies())
    except OncoMergeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title="Study cancer types")
    table.add_column("Study")
    table.add_column("Cancer type")
    for study_id, cancer_type in study_map.items():
        table.add_row(study_id, cancer_type)
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from oncomerge import __version__

    console.print(f"OncoMerge version {__version__}")


if __name__ == "__main__":
    app()
