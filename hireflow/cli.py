"""
HireFlow Command Line Interface

Provides CLI commands for managing jobs, applications and the hiring
pipeline. Commands that act on behalf of a user take ``--as USER_ID``;
the user is loaded from the database and treated as the authenticated
actor.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from hireflow.core.exceptions import HireFlowError

app = typer.Typer(
    name="hireflow",
    help="HireFlow job board CLI",
    add_completion=False,
)
console = Console()

STATUS_COLORS = {
    "Applied": "cyan",
    "Screening": "yellow",
    "Interview": "blue",
    "Technical": "blue",
    "HR": "magenta",
    "Offer": "magenta",
    "Hired": "green",
    "Rejected": "red",
    "Withdrawn": "dim",
}


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    from hireflow.utils.logger import setup_logging

    setup_logging()


def _require_db() -> None:
    """Exit early when MongoDB is unreachable."""
    from hireflow.data.database import get_database_manager

    if not get_database_manager().check_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)


def _resolve_actor(user_id: str):
    """Load the acting user, standing in for the authentication layer."""
    from hireflow.data.repositories import get_user_repository

    actor = get_user_repository().get_by_id(user_id)
    if actor is None:
        console.print(f"[red]Error: User not found: {user_id}[/red]")
        raise typer.Exit(1)
    return actor


def _fail(error: HireFlowError) -> None:
    console.print(f"[red]{error.error_code}: {error.message}[/red]")
    raise typer.Exit(1)


def _status(value: str) -> str:
    color = STATUS_COLORS.get(value, "white")
    return f"[{color}]{value}[/{color}]"


@app.command()
def version():
    """Show application version."""
    from hireflow import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration."""
    from hireflow.utils.config import get_settings

    settings = get_settings()

    table = Table(title="HireFlow Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Initialize the database with required indexes."""
    from hireflow.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")
    _require_db()
    console.print("  [green]✓[/green] Connected to MongoDB")

    get_database_manager().ensure_indexes()
    console.print("  [green]✓[/green] Indexes created")
    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def add_user(
    name: str = typer.Option(..., "--name", "-n", help="Full name"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    role: str = typer.Option("candidate", "--role", "-r", help="candidate, recruiter or admin"),
    skills: str = typer.Option("", "--skills", "-s", help="Comma-separated skills"),
    experience: float = typer.Option(0, "--experience", "-x", help="Years of experience"),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Location"),
):
    """Register a user."""
    from pydantic import ValidationError
    from pymongo.errors import DuplicateKeyError

    from hireflow.data.models import UserCreate
    from hireflow.data.repositories import get_user_repository

    _require_db()
    try:
        data = UserCreate(
            name=name,
            email=email,
            role=role,
            skills=skills,
            experience_years=experience,
            location=location,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid user: {e}[/red]")
        raise typer.Exit(1)

    try:
        user = get_user_repository().create_from_schema(data)
    except DuplicateKeyError:
        console.print(f"[red]Error: A user with email {data.email} already exists[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] User created with ID: [cyan]{user.id}[/cyan]")


@app.command()
def create_job(
    actor_id: str = typer.Option(..., "--as", help="Acting recruiter ID"),
    title: str = typer.Option(..., "--title", "-t", help="Job title"),
    description: str = typer.Option(..., "--description", "-d", help="Job description"),
    company: str = typer.Option(..., "--company", "-c", help="Company name"),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Location (default Remote)"),
    experience: float = typer.Option(0, "--experience", "-x", help="Required years of experience"),
    skills: Optional[str] = typer.Option(
        None, "--skills", "-s", help="Comma-separated skills (extracted from the description if omitted)"
    ),
):
    """Create a new job posting."""
    from hireflow.core.jobs import get_job_service
    from hireflow.data.models import JobCreate
    from hireflow.utils.normalize import normalize_tokens

    _require_db()
    actor = _resolve_actor(actor_id)
    data = JobCreate(
        title=title,
        description=description,
        company=company,
        location=location,
        experience_required=experience,
        required_skills=normalize_tokens(skills) if skills else None,
    )

    try:
        job = get_job_service().create_job(actor, data)
    except HireFlowError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Job created with ID: [cyan]{job.id}[/cyan]")
    console.print(f"  Required Skills: {', '.join(job.required_skills) or 'none'}")


@app.command()
def list_jobs(
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    limit: int = typer.Option(10, "--limit", help="Jobs per page"),
    search: Optional[str] = typer.Option(None, "--search", help="Filter by title"),
    company: Optional[str] = typer.Option(None, "--company", "-c", help="Filter by company"),
    posted_by: Optional[str] = typer.Option(None, "--posted-by", help="Filter by recruiter ID"),
):
    """List job postings, newest first."""
    from hireflow.core.jobs import get_job_service

    _require_db()
    result = get_job_service().list_jobs(
        page=page, limit=limit, search=search, company=company, posted_by=posted_by
    )

    if not result.jobs:
        console.print("[yellow]No jobs found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Jobs (page {result.page}/{result.pages}, {result.total} total)")
    table.add_column("ID", style="dim", width=24)
    table.add_column("Title", style="cyan")
    table.add_column("Company")
    table.add_column("Location")
    table.add_column("Exp.", justify="right")
    table.add_column("Skills")

    for job in result.jobs:
        table.add_row(
            str(job.id),
            job.title[:40] + "..." if len(job.title) > 40 else job.title,
            job.company,
            job.location,
            f"{job.experience_required:g}",
            ", ".join(job.required_skills[:5]),
        )

    console.print(table)


@app.command()
def apply(
    job_id: str = typer.Argument(..., help="Job ID"),
    actor_id: str = typer.Option(..., "--as", help="Acting candidate ID"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Notes for the recruiter"),
):
    """Apply to a job as a candidate."""
    from hireflow.core.lifecycle import get_application_service

    _require_db()
    actor = _resolve_actor(actor_id)
    try:
        application = get_application_service().apply(actor, job_id, notes)
    except HireFlowError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Application submitted: [cyan]{application.id}[/cyan]")
    console.print(
        f"  Match score: [bold]{application.match_score}[/bold] "
        f"(skills {application.skill_score}, experience {application.experience_score}, "
        f"location {application.location_score})"
    )


@app.command()
def withdraw(
    application_id: str = typer.Argument(..., help="Application ID"),
    actor_id: str = typer.Option(..., "--as", help="Acting candidate ID"),
):
    """Withdraw one of your applications."""
    from hireflow.core.lifecycle import get_application_service

    _require_db()
    actor = _resolve_actor(actor_id)
    try:
        get_application_service().withdraw(application_id, actor)
    except HireFlowError as e:
        _fail(e)

    console.print("[green]✓[/green] Application withdrawn successfully")


@app.command()
def move(
    application_id: str = typer.Argument(..., help="Application ID"),
    status: str = typer.Argument(..., help="Target status, e.g. Screening"),
    actor_id: str = typer.Option(..., "--as", help="Acting recruiter or admin ID"),
    note: Optional[str] = typer.Option(None, "--note", help="Note recorded in the history"),
    notes: Optional[str] = typer.Option(None, "--notes", help="Replace the application notes"),
):
    """Move an application to the next pipeline status."""
    from hireflow.core.lifecycle import get_application_service

    _require_db()
    actor = _resolve_actor(actor_id)
    try:
        application = get_application_service().transition(
            application_id, actor, status, note=note, notes=notes
        )
    except HireFlowError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Application is now {_status(application.status)}")


@app.command()
def applications(
    actor_id: str = typer.Option(..., "--as", help="Acting user ID"),
    job_id: Optional[str] = typer.Option(None, "--job", "-j", help="List applications for this job"),
):
    """List applications for a job (recruiters) or your own (candidates)."""
    from hireflow.core.lifecycle import get_application_service

    _require_db()
    actor = _resolve_actor(actor_id)
    service = get_application_service()

    try:
        if job_id:
            views = service.list_for_job(job_id, actor)
        else:
            views = service.list_for_candidate(actor)
    except HireFlowError as e:
        _fail(e)

    if not views:
        console.print("[yellow]No applications found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Applications ({len(views)} total)")
    table.add_column("ID", style="dim", width=24)
    table.add_column("Candidate" if job_id else "Job", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Skill/Exp/Loc", justify="right")
    table.add_column("History", justify="right")

    for view in views:
        if job_id:
            label = view.candidate.name if view.candidate else "Unknown candidate"
        else:
            label = f"{view.job.title} @ {view.job.company}" if view.job else "Unknown job"
        scores = view.scores
        table.add_row(
            str(view.application_id),
            label,
            _status(view.status),
            str(scores.total_score),
            f"{scores.skill_score}/{scores.experience_score}/{scores.location_score}",
            str(len(view.history)),
        )

    console.print(table)


@app.command()
def rank(
    job_id: str = typer.Argument(..., help="Job ID"),
    actor_id: str = typer.Option(..., "--as", help="Acting recruiter or admin ID"),
    top: int = typer.Option(10, "--top", "-n", help="Number of candidates to show"),
):
    """Rank candidates for a job by match score."""
    from hireflow.core.matching import get_ranking_service

    _require_db()
    actor = _resolve_actor(actor_id)
    try:
        ranked = get_ranking_service().rank_candidates_for_job(job_id, actor, limit=top)
    except HireFlowError as e:
        _fail(e)

    if not ranked:
        console.print("[yellow]No candidates found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Top Candidates")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Skills", justify="right")
    table.add_column("Experience", justify="right")
    table.add_column("Location", justify="right")

    for position, candidate in enumerate(ranked, start=1):
        scores = candidate.scores
        table.add_row(
            str(position),
            candidate.name,
            candidate.email,
            str(scores.total_score),
            str(scores.skill_score),
            str(scores.experience_score),
            str(scores.location_score),
        )

    console.print(table)


@app.command()
def stats(
    actor_id: str = typer.Option(..., "--as", help="Acting recruiter or admin ID"),
):
    """Show dashboard statistics."""
    from hireflow.core.dashboard import get_dashboard_service

    _require_db()
    actor = _resolve_actor(actor_id)
    try:
        dashboard = get_dashboard_service().get_stats(actor)
    except HireFlowError as e:
        _fail(e)

    console.print(f"[bold]Jobs:[/bold] {dashboard.total_jobs}")
    console.print(f"[bold]Applications:[/bold] {dashboard.total_applications}")

    if dashboard.applications_by_status:
        table = Table(title="Applications by Status")
        table.add_column("Status")
        table.add_column("Count", justify="right")
        for row in dashboard.applications_by_status:
            table.add_row(_status(row.status), str(row.count))
        console.print(table)

    if dashboard.applications_per_job:
        table = Table(title="Applications per Job")
        table.add_column("Job", style="cyan")
        table.add_column("Count", justify="right")
        for row in dashboard.applications_per_job:
            table.add_row(row.job_title, str(row.count))
        console.print(table)


if __name__ == "__main__":
    app()
