"""Command-line interface for the completion guide.

Generates a weekly study schedule from the task catalog, shows it, records
completed tasks and re-packs single weeks when the available time changes.
State is kept in a JSON file between invocations.
"""

from datetime import date
from typing import NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from completion_guide.analytics.xapi import (
    XapiClient,
    checkbox_statement,
    completion_date_statement,
    minutes_statement,
)
from completion_guide.config.settings import settings
from completion_guide.core.errors import GuideError, TimeInputError
from completion_guide.core.logger import setup_logger
from completion_guide.core.timeutils import minutes_to_display, validate_time_input
from completion_guide.scheduling.advisories import allocated_count, compute_warnings
from completion_guide.scheduling.calendar import total_weekly_capacity
from completion_guide.scheduling.service import (
    build_calendar,
    day_progress,
    final_day,
    find_task,
    find_week_index,
    generate_schedule,
    override_week,
)
from completion_guide.scheduling.weekdays import day_name, order_days, parse_day
from completion_guide.state.store import RunState, StateStore, toggle_task
from completion_guide.tasks.loader import load_tasks
from completion_guide.tasks.pool import initialize_task_pool, task_label

console = Console()

app = typer.Typer(
    name="completion-guide",
    help="Completion Guide - weekly study schedule planner",
    add_completion=False,
)


@app.callback()
def main(debug: bool = typer.Option(False, "--debug", help="Enable debug logging")) -> None:
    setup_logger(level="DEBUG" if debug else settings.log_level, log_file=settings.log_file)


def _store(state_file: str | None) -> StateStore:
    return StateStore(state_file or settings.state_file)


def _parse_days(text: str) -> list[str]:
    try:
        return order_days(parse_day(token) for token in text.split(",") if token.strip())
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _parse_minutes(entries: list[str] | None) -> dict[str, int]:
    """Parse repeated DAY=TIME entries (e.g. "M=2h 30m", "F=90m", "Su=1.5")."""
    minutes: dict[str, int] = {}
    for entry in entries or []:
        if "=" not in entry:
            raise typer.BadParameter(f"Expected DAY=TIME, got '{entry}'")
        day_token, time_text = entry.split("=", 1)
        try:
            day = parse_day(day_token)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e
        result = validate_time_input(time_text, settings.max_minutes_per_day)
        if not result.valid:
            raise TimeInputError(f"{day_name(day)}: {result.error}")
        minutes[day] = result.minutes
    return minutes


def _parse_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got '{text}'") from e


def _load_state(store: StateStore) -> RunState:
    state = store.load()
    if state is None or not state.submitted:
        console.print("[yellow]No schedule yet. Run `plan` first.[/yellow]")
        raise typer.Exit(code=1)
    return state


def _fail(error: GuideError) -> NoReturn:
    logger.error(str(error))
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(code=1)


def _render(state: RunState) -> None:
    if state.warnings.unallocated_tasks:
        console.print(
            Panel(
                "The hours you have submitted do not allow all tasks to populate the schedule.",
                title="Warning",
                border_style="red",
            )
        )
    if state.warnings.exceeded_date:
        console.print(
            Panel(
                "The hours you have submitted are insufficient to finish by the desired completion date.",
                title="Warning",
                border_style="red",
            )
        )

    if not state.weeks:
        console.print("[dim]No tasks to display. Check your schedule settings.[/dim]")
        return

    checked = set(state.checked_task_ids)
    last = final_day(state.weeks)

    for week in state.weeks:
        weekly = minutes_to_display(int(total_weekly_capacity(week.days, week.capacity)))
        table = Table(title=f"Week {week.week_number} ({weekly} available)", show_lines=True)
        table.add_column("Day", style="cyan", no_wrap=True)
        table.add_column("Time", justify="right")
        table.add_column("Tasks")

        progress = {p.day: p for p in day_progress(week, checked)}
        for assignment in week.day_assignments:
            capacity = week.capacity.get(assignment.day, 0)
            used = f"{minutes_to_display(int(assignment.hours_used))} / {minutes_to_display(int(capacity))}"
            lines = [
                f"{'[green]✓[/green]' if task.id in checked else '☐'} [{task.id}] {escape(task_label(task))}"
                for task in assignment.tasks
            ]
            label = day_name(assignment.day)
            if progress[assignment.day].is_complete:
                label += " ✓"
            if last == (week.week_number, assignment.day):
                label += "\n[bold magenta]final day[/bold magenta]"
            table.add_row(label, used, "\n".join(lines) or "[dim]-[/dim]")

        console.print(table)


@app.command()
def plan(
    days: str = typer.Option(..., "--days", help="Comma-separated days, e.g. M,W,F"),
    completion_date: str = typer.Option(..., "--completion-date", help="Target date, YYYY-MM-DD"),
    minutes: list[str] | None = typer.Option(None, "--minutes", "-m", help="DAY=TIME, e.g. M=2h30m (repeatable)"),
    tasks: str | None = typer.Option(None, "--tasks", help="Task catalog path or URL"),
    state_file: str | None = typer.Option(None, "--state", help="State file path"),
) -> None:
    """Generate a schedule from scratch and save it."""
    target = _parse_date(completion_date)
    selected = _parse_days(days)
    try:
        per_day = _parse_minutes(minutes)
    except GuideError as e:
        _fail(e)

    catalog = load_tasks(tasks or settings.tasks_source)
    if not catalog:
        console.print("[red]No tasks loaded.[/red]")
        raise typer.Exit(code=1)

    try:
        result = generate_schedule(
            initialize_task_pool(catalog),
            selected,
            per_day,
            target,
            catalog_size=len(catalog),
        )
    except GuideError as e:
        _fail(e)

    state = RunState(
        selected_days=result.selected_days,
        minutes_per_day=result.minutes_per_day,
        completion_date=target,
        submitted=True,
        weeks=result.weeks,
        warnings=result.warnings,
    )
    _store(state_file).save(state)
    _render(state)

    xapi = XapiClient()
    if xapi.enabled:
        xapi.send(completion_date_statement(actor=xapi.actor, base_url=xapi.base_url, completion_date=target.isoformat()))
        for day, value in result.minutes_per_day.items():
            xapi.send(minutes_statement(actor=xapi.actor, base_url=xapi.base_url, day=day, minutes=value))


@app.command()
def show(state_file: str | None = typer.Option(None, "--state", help="State file path")) -> None:
    """Print the saved schedule."""
    _render(_load_state(_store(state_file)))


@app.command()
def check(
    task_id: int = typer.Argument(..., help="Task id to mark done (or undo)"),
    state_file: str | None = typer.Option(None, "--state", help="State file path"),
) -> None:
    """Toggle a task's completed mark."""
    store = _store(state_file)
    state = _load_state(store)

    located = find_task(state.weeks, task_id)
    if located is None:
        console.print(f"[red]Task {task_id} is not in the schedule.[/red]")
        raise typer.Exit(code=1)
    week, day, task = located

    state = toggle_task(state, task_id)
    store.save(state)
    now_checked = task_id in state.checked_task_ids
    console.print(f"{'Checked' if now_checked else 'Unchecked'} [{task_id}] {task_label(task)}")

    xapi = XapiClient()
    if xapi.enabled:
        xapi.send(
            checkbox_statement(
                actor=xapi.actor,
                base_url=xapi.base_url,
                week_number=week.week_number,
                day=day,
                task=task,
                checked=now_checked,
            )
        )


@app.command()
def override(
    week_number: int = typer.Argument(..., help="Week to re-plan"),
    days: str = typer.Option(..., "--days", help="Comma-separated days for this week"),
    minutes: list[str] | None = typer.Option(None, "--minutes", "-m", help="DAY=TIME (repeatable)"),
    state_file: str | None = typer.Option(None, "--state", help="State file path"),
) -> None:
    """Change one week's days and time; completed tasks stay put."""
    store = _store(state_file)
    state = _load_state(store)
    new_days = _parse_days(days)

    try:
        per_day = _parse_minutes(minutes)
        week = state.weeks[find_week_index(state.weeks, week_number)]
        base = {**week.capacity, **per_day}
        calendar = build_calendar(new_days, base)
        weeks = override_week(state.weeks, week_number, calendar.days, calendar.capacity, state.checked_task_ids)
    except GuideError as e:
        _fail(e)

    warnings = state.warnings
    if state.completion_date is not None:
        warnings = compute_warnings(weeks, allocated_count(state.weeks), state.completion_date, date.today())

    state = state.model_copy(update={"weeks": weeks, "warnings": warnings})
    store.save(state)
    _render(state)


def run() -> None:
    app()


if __name__ == "__main__":
    app()
