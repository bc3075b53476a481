"""
O1-Match Command Line Interface

Provides CLI commands for scoring and ranking talent and job listings,
plus profile store setup and import.
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from o1match.core.exceptions import MatchServiceError
from o1match.utils.constants import APP_DISPLAY_NAME, MatchCategory, MatchFactor
from o1match.utils.logger import get_logger, setup_logging

app = typer.Typer(
    name="o1match",
    help=f"{APP_DISPLAY_NAME} CLI",
    add_completion=False,
)
console = Console()
logger = get_logger(__name__)

CATEGORY_COLORS = {
    MatchCategory.EXCELLENT: "green",
    MatchCategory.STRONG: "blue",
    MatchCategory.MODERATE: "yellow",
    MatchCategory.WEAK: "magenta",
    MatchCategory.POOR: "red",
}


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    setup_logging()


def _category_cell(category: Any) -> str:
    category = MatchCategory(category)
    color = CATEGORY_COLORS[category]
    return f"[{color}]{category.value.upper()}[/{color}]"


def _read_json(path: Path) -> Any:
    if not path.exists():
        console.print(f"[red]Error: File does not exist: {path}[/red]")
        raise typer.Exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON in {path}: {e}[/red]")
        raise typer.Exit(1)


def _get_service():
    """Connect to the profile store and build the match service."""
    from o1match.data.database import get_database_manager
    from o1match.services import get_match_service

    if not get_database_manager().check_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)
    return get_match_service()


def _print_match(match, title: str) -> None:
    """Render a match result as a breakdown table and summary."""
    table = Table(title=title)
    table.add_column("Factor", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Weighted", justify="right")

    for factor, entry in match.breakdown.items():
        table.add_row(MatchFactor(factor).label, f"{entry.score:.1f}", f"{entry.weight:.0%}", f"{entry.weighted:.1f}")

    console.print(table)
    console.print(f"Overall: [bold]{match.overall_score}[/bold] {_category_cell(match.category)}")
    console.print(f"  {match.summary}")

    missing = match.details.missing_required_skills
    if missing:
        console.print(f"  [yellow]Missing required skills:[/yellow] {', '.join(missing)}")


@app.command()
def version():
    """Show application version."""
    from o1match import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration, including match weights."""
    from o1match.utils.config import get_settings

    settings = get_settings()

    table = Table(title=f"{APP_DISPLAY_NAME} Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    for factor, weight in settings.matching.to_weights().to_dict().items():
        table.add_row(f"Weight: {factor}", f"{weight:.2f}")
    table.add_row("Candidate Pool Limit", str(settings.matching.candidate_pool_limit))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Check the database connection and create indexes."""
    from o1match.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()
    if not db_manager.check_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
        raise typer.Exit(1)
    console.print("  [green]✓[/green] Connected to MongoDB")

    db_manager.ensure_indexes()
    console.print("  [green]✓[/green] Indexes created")
    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def import_profiles(
    path: Path = typer.Argument(..., help="JSON file with 'employers', 'jobs' and 'talents' arrays"),
):
    """
    Import employer, job and talent profiles from a JSON file.

    Jobs may reference their employer by ``employer_user_id``. Every record
    is validated before anything is written.
    """
    from bson import ObjectId

    from o1match.data.database import get_database_manager
    from o1match.data.models import EmployerProfile, JobListing, TalentProfile
    from o1match.data.repositories import (
        get_employer_repository,
        get_job_repository,
        get_talent_repository,
    )

    data = _read_json(path)
    if not isinstance(data, dict):
        console.print("[red]Error: Expected a JSON object at the top level.[/red]")
        raise typer.Exit(1)

    if not get_database_manager().check_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)

    try:
        employers = [EmployerProfile.model_validate(e) for e in data.get("employers", [])]
        for employer in employers:
            if employer.id is None:
                employer.id = ObjectId()
        employer_ids = {e.user_id: e.id for e in employers}

        jobs = []
        for record in data.get("jobs", []):
            if not isinstance(record, dict):
                console.print("[red]Error: Each job must be a JSON object.[/red]")
                raise typer.Exit(1)
            record = dict(record)
            user_id = record.pop("employer_user_id", None)
            if user_id is not None:
                if user_id not in employer_ids:
                    console.print(f"[red]Error: Unknown employer_user_id: {user_id}[/red]")
                    raise typer.Exit(1)
                record["employer_id"] = employer_ids[user_id]
            jobs.append(JobListing.model_validate(record))

        talents = [TalentProfile.model_validate(t) for t in data.get("talents", [])]
    except ValidationError as e:
        console.print(f"[red]Error: Invalid profile data:[/red]\n{e}")
        raise typer.Exit(1)

    get_employer_repository().bulk_create(employers)
    get_job_repository().bulk_create(jobs)
    get_talent_repository().bulk_create(talents)

    table = Table(title="Imported Profiles")
    table.add_column("Collection", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("employer_profiles", str(len(employers)))
    table.add_row("job_listings", str(len(jobs)))
    table.add_row("talent_profiles", str(len(talents)))
    console.print(table)


@app.command()
def score(
    talent_file: Path = typer.Argument(..., help="Talent profile JSON file"),
    job_file: Path = typer.Argument(..., help="Job profile JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Score a talent against a job from JSON files, without a database."""
    from o1match.core.matching import get_matching_engine
    from o1match.data.models import JobMatchProfile, TalentMatchProfile

    talent_record = _read_json(talent_file)
    job_record = _read_json(job_file)
    if not isinstance(talent_record, dict) or not isinstance(job_record, dict):
        console.print("[red]Error: Each file must hold a single JSON object.[/red]")
        raise typer.Exit(1)

    talent = TalentMatchProfile.from_record(talent_record)
    job = JobMatchProfile.from_record(job_record)
    match = get_matching_engine().calculate_match_score(talent, job)

    if as_json:
        typer.echo(match.model_dump_json(indent=2))
        return
    _print_match(match, f"Match: {talent.id or talent_file.stem} / {job.id or job_file.stem}")


@app.command()
def match(
    talent_id: str = typer.Argument(..., help="Talent profile ID"),
    job_id: str = typer.Argument(..., help="Job listing ID"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Score one stored talent against one stored job."""
    service = _get_service()
    try:
        result = service.single_match(talent_id, job_id)
    except MatchServiceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except Exception:
        logger.exception(f"Match failed for talent {talent_id} and job {job_id}")
        console.print("[red]Error: Failed to calculate match[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    _print_match(result.match, f"Match: {talent_id} / {job_id}")


@app.command()
def best_jobs(
    talent_id: str = typer.Argument(..., help="Talent profile ID"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=0, help="Number of jobs to show"),
    as_json: bool = typer.Option(False, "--json", help="Print the results as JSON"),
):
    """Show the best active jobs for a talent."""
    service = _get_service()
    try:
        results = service.job_matches_for_talent(talent_id, limit)
    except MatchServiceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except Exception:
        logger.exception(f"Job ranking failed for talent {talent_id}")
        console.print("[red]Error: Failed to calculate matches[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
        return

    if not results:
        console.print("[yellow]No active jobs found.[/yellow]")
        return

    table = Table(title=f"Top {len(results)} Jobs for {talent_id}")
    table.add_column("Rank", style="dim", width=4)
    table.add_column("Job", style="cyan")
    table.add_column("Company")
    table.add_column("Score", justify="right")
    table.add_column("Level", justify="center")
    table.add_column("Summary")

    for i, r in enumerate(results, 1):
        table.add_row(
            str(i),
            r.title or r.job_id,
            r.company_name or "-",
            str(r.match_score),
            _category_cell(r.match_category),
            r.match_summary,
        )
    console.print(table)


@app.command()
def best_talent(
    job_id: str = typer.Argument(..., help="Job listing ID"),
    user_id: str = typer.Option(..., "--user", "-u", help="ID of the employer user making the request"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=0, help="Number of candidates to show"),
    as_json: bool = typer.Option(False, "--json", help="Print the results as JSON"),
):
    """Show the best public talent for a job owned by the given employer user."""
    service = _get_service()
    try:
        results = service.talent_matches_for_job(job_id, user_id, limit)
    except MatchServiceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except Exception:
        logger.exception(f"Talent ranking failed for job {job_id}")
        console.print("[red]Error: Failed to calculate matches[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
        return

    if not results:
        console.print("[yellow]No eligible talent found.[/yellow]")
        return

    table = Table(title=f"Top {len(results)} Candidates for {job_id}")
    table.add_column("Rank", style="dim", width=4)
    table.add_column("Talent", style="cyan")
    table.add_column("Title")
    table.add_column("O-1", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Level", justify="center")
    table.add_column("Summary")

    for i, r in enumerate(results, 1):
        table.add_row(
            str(i),
            r.talent_id,
            r.current_job_title or "-",
            str(r.o1_score),
            str(r.match_score),
            _category_cell(r.match_category),
            r.match_summary,
        )
    console.print(table)


if __name__ == "__main__":
    app()
