import typer
from rich.console import Console
from rich.table import Table
from typing import Optional, List
from contextlib import contextmanager
from pydantic import ValidationError

from planner.database import SessionLocal, init_db
from planner.dates import parse_date, format_date
from planner.enums import Difficulty, ExceptionType, PaceMode, RetentionEventType, ReviewStatus, StudyStage
from planner.exceptions import PlannerError
from planner.log import configure_logging
from planner.repository import PlannerRepository
from planner.service import PlannerService

app = typer.Typer(help="Revision Planner CLI - spaced-repetition reviews that fit your week")
console = Console()

WEEKDAYS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@app.callback()
def main(log_level: Optional[str] = typer.Option(None, help="Log level (DEBUG, INFO, WARNING)")):
    configure_logging(log_level)


@contextmanager
def planner_service():
    """Service bound to a fresh session; planner and validation errors end the command with exit code 1"""
    db = SessionLocal()
    try:
        yield PlannerService(PlannerRepository(db))
    except PlannerError as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "input"
            console.print(f"[red]✗[/red] Invalid {field}: {error['msg']}")
        raise typer.Exit(code=1)
    finally:
        db.close()


@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")

@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    from planner.database import engine, Base
    console.print("[yellow]Dropping all tables...[/yellow]")
    Base.metadata.drop_all(bind=engine)
    console.print("[yellow]Recreating tables...[/yellow]")
    init_db()
    console.print("[green]✓[/green] Database reset complete! All data deleted.")

@app.command()
def register(
    email: str = typer.Option(..., prompt="Email"),
    name: str = typer.Option(..., prompt="Name"),
    goal: Optional[str] = typer.Option(None, help="Target course or exam")
):
    """Register a new user with default planner settings"""
    with planner_service() as service:
        user = service.register_user(email, name, goal=goal)
        console.print(f"[green]✓[/green] User registered! User ID: {user.id}")

@app.command()
def onboard(
    user_id: str = typer.Option(..., prompt="User ID"),
    goal: Optional[str] = typer.Option(None, help="Target course or exam, e.g. Medicine"),
    stage: Optional[StudyStage] = typer.Option(None, help="Study stage")
):
    """Set goal and study stage, finish onboarding and suggest starter subjects"""
    with planner_service() as service:
        suggestions = service.complete_onboarding(user_id, goal=goal, stage=stage)
        console.print("[green]✓[/green] Onboarding complete! Suggested subjects:")
        for name in suggestions:
            console.print(f"  - {name}")

@app.command()
def suggest_subjects(user_id: str):
    """Suggest starter subjects for the user's goal and stage"""
    with planner_service() as service:
        for name in service.suggest_subjects(user_id):
            console.print(f"  - {name}")

@app.command()
def add_subject(
    user_id: str = typer.Option(..., prompt="User ID"),
    name: str = typer.Option(..., prompt="Subject name")
):
    """Add a subject"""
    with planner_service() as service:
        subject = service.add_subject(user_id, name)
        console.print(f"[green]✓[/green] Subject added! ID: {subject.id}")

@app.command()
def list_subjects(user_id: str):
    """List subjects and how many contents each holds"""
    with planner_service() as service:
        subjects = service.list_subjects(user_id)
        console.print(f"\n[bold]Subjects for user {user_id}:[/bold]")
        for subject in subjects:
            console.print(f"  - {subject.name} [dim]({subject.id}, {len(subject.contents)} contents)[/dim]")

@app.command()
def delete_subject(user_id: str, subject_id: str):
    """Delete a subject with all of its contents and reviews"""
    with planner_service() as service:
        service.delete_subject(user_id, subject_id)
        console.print(f"[green]✓[/green] Subject {subject_id} deleted")

@app.command()
def add_content(
    user_id: str = typer.Option(..., prompt="User ID"),
    subject_id: str = typer.Option(..., prompt="Subject ID"),
    topic: str = typer.Option(..., prompt="Topic studied"),
    difficulty: Difficulty = typer.Option(Difficulty.MEDIUM, help="Difficulty"),
    studied: Optional[str] = typer.Option(None, help="Date studied (YYYY-MM-DD), default: today")
):
    """Log a studied topic and schedule its reviews"""
    with planner_service() as service:
        date_studied = parse_date(studied) if studied else service.today()
        content, reviews = service.add_content_with_reviews(user_id, subject_id, topic, date_studied, difficulty)
        console.print(f"[green]✓[/green] Content logged! ID: {content.id}")
        for review in sorted(reviews, key=lambda r: r.date):
            drift = (review.date - review.original_date).days
            drift_str = f" [yellow](moved {drift:+d}d)[/yellow]" if drift else ""
            console.print(f"  Review on {format_date(review.date)} (effort {review.effort}){drift_str}")

@app.command()
def edit_content(
    user_id: str = typer.Option(..., prompt="User ID"),
    content_id: str = typer.Option(..., prompt="Content ID"),
    topic: Optional[str] = typer.Option(None, help="New topic text"),
    difficulty: Optional[Difficulty] = typer.Option(None, help="New difficulty"),
    studied: Optional[str] = typer.Option(None, help="New study date (YYYY-MM-DD)")
):
    """Edit a content; new difficulty or date regenerates its pending reviews"""
    with planner_service() as service:
        updates = {}
        if topic:
            updates["topic"] = topic
        if difficulty:
            updates["difficulty"] = difficulty
        if studied:
            updates["date_studied"] = parse_date(studied)
        content, new_reviews = service.update_content(user_id, content_id, updates)
        console.print(f"[green]✓[/green] Content {content.id} updated")
        if new_reviews:
            console.print(f"  Regenerated {len(new_reviews)} pending reviews")

@app.command()
def delete_content(user_id: str, content_id: str):
    """Delete a content and its reviews"""
    with planner_service() as service:
        service.delete_content(user_id, content_id)
        console.print(f"[green]✓[/green] Content {content_id} deleted")

@app.command()
def list_reviews(
    user_id: str,
    all_statuses: bool = typer.Option(False, "--all", help="Include completed and skipped reviews")
):
    """List scheduled reviews"""
    with planner_service() as service:
        reviews = service.list_reviews(user_id, include_all=all_statuses)
        contents = {c.id: c for c in service.list_contents(user_id)}
        today = service.today()

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Review ID", style="dim")
        table.add_column("Date", style="cyan", width=12)
        table.add_column("Topic", style="green")
        table.add_column("Effort", justify="right")
        table.add_column("Window", style="yellow")
        table.add_column("Status", style="blue")

        for review in reviews:
            content = contents.get(review.content_id)
            overdue = review.status == ReviewStatus.PENDING and review.date < today
            table.add_row(
                review.id,
                format_date(review.date) + (" [red]![/red]" if overdue else ""),
                content.topic[:40] if content else "?",
                f"{review.effort:.1f}",
                f"{format_date(review.window_start)} → {format_date(review.window_end)}",
                review.status.value
            )
        console.print(table)

@app.command()
def calendar(
    user_id: str,
    days: int = typer.Option(14, help="Number of days to show")
):
    """Show daily review load against capacity"""
    with planner_service() as service:
        loads = service.day_load(user_id, days=days)
        service.mark_calendar_checked(user_id)

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Date", style="cyan", width=12)
        table.add_column("Day")
        table.add_column("Reviews", justify="right")
        table.add_column("Load", justify="right")
        table.add_column("Capacity", justify="right", style="blue")

        for day in loads:
            style = "red" if day.load > day.capacity else "green"
            table.add_row(
                format_date(day.date),
                WEEKDAYS[(day.date.isoweekday()) % 7],
                str(day.review_count),
                f"[{style}]{day.load:.1f}[/{style}]",
                f"{day.capacity:.1f}"
            )
        console.print(table)

@app.command()
def feedback(
    user_id: str = typer.Option(..., prompt="User ID"),
    content_id: str = typer.Option(..., prompt="Content ID"),
    result: RetentionEventType = typer.Option(..., prompt="Result (remembered/forgot)"),
    review_id: Optional[str] = typer.Option(None, help="Review being answered")
):
    """Record whether you remembered a topic and adapt its reviews"""
    with planner_service() as service:
        rebalance = service.adjust_schedule(user_id, content_id, result, review_id)
        console.print(f"[green]✓[/green] Feedback recorded ({result.value})")
        console.print(f"  Rebalanced schedule: {rebalance.moved_count} reviews moved")
        for review in service.list_reviews(user_id, content_id):
            console.print(f"  Next review: {format_date(review.date)} (effort {review.effort})")

@app.command()
def complete(user_id: str, review_id: str):
    """Mark a review as done"""
    with planner_service() as service:
        service.complete_review(user_id, review_id)
        console.print(f"[green]✓[/green] Review {review_id} completed")

@app.command()
def skip(user_id: str, review_id: str):
    """Skip a review"""
    with planner_service() as service:
        service.skip_review(user_id, review_id)
        console.print(f"[green]✓[/green] Review {review_id} skipped")

@app.command()
def heavy_tomorrow(user_id: str):
    """Lighten tomorrow and move reviews out of it"""
    with planner_service() as service:
        exception = service.set_tomorrow_heavy(user_id)
        console.print(f"[green]✓[/green] {format_date(exception.date)} marked heavy (capacity x{exception.capacity_multiplier})")

@app.command()
def add_exception(
    user_id: str = typer.Option(..., prompt="User ID"),
    day: str = typer.Option(..., prompt="Date (YYYY-MM-DD)"),
    kind: ExceptionType = typer.Option(ExceptionType.HEAVY, help="heavy, unavailable or exam"),
    multiplier: float = typer.Option(0.5, help="Capacity multiplier for that day")
):
    """Override capacity for a single date"""
    with planner_service() as service:
        service.add_day_exception(user_id, parse_date(day), kind, multiplier)
        console.print(f"[green]✓[/green] {day} set to {kind.value} (capacity x{multiplier})")

@app.command()
def set_pace(user_id: str, mode: PaceMode):
    """Change pace (normal, faster, slower) and rebalance"""
    with planner_service() as service:
        result = service.set_pace(user_id, mode)
        console.print(f"[green]✓[/green] Pace set to {mode.value}; {result.moved_count} reviews moved")

@app.command()
def set_limit(user_id: str, daily_limit: int):
    """Change the base daily capacity and rebalance"""
    with planner_service() as service:
        result = service.set_daily_limit(user_id, daily_limit)
        console.print(f"[green]✓[/green] Daily limit set to {daily_limit}; {result.moved_count} reviews moved")

@app.command()
def set_heavy_days(
    user_id: str,
    days: List[int] = typer.Argument(None, help="Weekday indices, 0=Sunday")
):
    """Set the weekly heavy days and rebalance"""
    with planner_service() as service:
        result = service.set_heavy_days(user_id, days or [])
        names = ", ".join(WEEKDAYS[d] for d in sorted(set(days or []))) or "none"
        console.print(f"[green]✓[/green] Heavy days: {names}; {result.moved_count} reviews moved")

@app.command()
def rebalance(
    user_id: str,
    horizon: int = typer.Option(14, help="Days of load forecast to show")
):
    """Rebalance all pending reviews"""
    with planner_service() as service:
        result = service.rebalance(user_id, horizon_days=horizon)
        console.print(f"[green]✓[/green] {len(result.placements)} reviews placed, {result.moved_count} moved, {len(result.fallbacks)} over capacity")
        for day, load in result.daily_load.items():
            console.print(f"  {format_date(day)}: {load:.1f}")

@app.command(name="next")
def next_step(user_id: str):
    """Show the suggested next action"""
    with planner_service() as service:
        action = service.next_action(user_id)
        details = []
        if action.count:
            details.append(f"{action.count} reviews")
        if action.date:
            details.append(format_date(action.date))
        console.print(f"[bold]{action.key}[/bold] → {action.route}" + (f" ({', '.join(details)})" if details else ""))

if __name__ == "__main__":
    app()
