"""CLI interface for pagebound."""

import asyncio
import logging
from datetime import date, datetime
from enum import StrEnum
from pathlib import Path
from typing import Annotated, NoReturn, Optional, TextIO

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from pagebound.config import PageboundConfig, load_config, merge_cli_overrides
from pagebound.entries.autosave import AutosaveDebouncer
from pagebound.entries.models import JournalEntry, Mood
from pagebound.entries.store import EntryStore
from pagebound.errors import PageboundError
from pagebound.index.search import SearchIndex, highlight_spans
from pagebound.index.tags import TagIndex
from pagebound.insights.memories import group_by_years_ago
from pagebound.insights.milestones import current_milestone, next_milestone, progress_to_next
from pagebound.insights.mood import DAY_NAMES, TIME_LABELS, InsightKind, MoodAnalyzer
from pagebound.insights.streaks import DateRange, StreakAnalyzer
from pagebound.programs.catalog import GUIDED_PROGRAMS
from pagebound.programs.models import ProgramStatus
from pagebound.programs.tracker import ProgramProgressTracker
from pagebound.session import daily_quote
from pagebound.storage import JournalFileStore

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="pagebound",
    help="Keep a dated journal and see what it says about you.",
)
program_app = typer.Typer(help="Guided multi-day writing programs.")
app.add_typer(program_app, name="program")

console = Console()

DATE_FORMATS = ["%Y-%m-%d"]


class StatsRange(StrEnum):
    WEEK_DAYS = "7d"
    MONTH_DAYS = "30d"
    THIS_WEEK = "week"
    THIS_MONTH = "month"
    ALL_TIME = "all"


_INSIGHT_STYLES = {
    InsightKind.POSITIVE: "green",
    InsightKind.NEUTRAL: "cyan",
    InsightKind.ACTIONABLE: "yellow",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from pagebound import __version__

        console.print(f"pagebound {__version__}")
        raise typer.Exit()


def _setup_logging(level: str) -> None:
    package_logger = logging.getLogger("pagebound")
    package_logger.handlers = [RichHandler(console=Console(stderr=True), show_path=False)]
    package_logger.setLevel(getattr(logging, level, logging.WARNING))
    package_logger.propagate = False


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to a pagebound TOML config file."),
    ] = None,
    data_dir: Annotated[
        Optional[Path],
        typer.Option("--data-dir", "-d", help="Directory holding the journal store."),
    ] = None,
    user: Annotated[
        Optional[str],
        typer.Option("--user", help="User id for guided-program progress."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING...)."),
    ] = None,
) -> None:
    """pagebound - a journal with streaks, moods, and guided programs."""
    config = merge_cli_overrides(
        load_config(config_file),
        data_dir=data_dir,
        user=user,
        log_level=log_level,
    )
    _setup_logging(config.logging.level)
    logger.debug("Using journal store in %s", config.data_dir)
    ctx.obj = config


# ── Helpers ──────────────────────────────────────────────────────


def _config(ctx: typer.Context) -> PageboundConfig:
    return ctx.obj if isinstance(ctx.obj, PageboundConfig) else load_config()


def _entry_store(ctx: typer.Context) -> EntryStore:
    return EntryStore(JournalFileStore(_config(ctx).data_dir))


def _tracker(ctx: typer.Context) -> ProgramProgressTracker:
    return ProgramProgressTracker(JournalFileStore(_config(ctx).data_dir))


def _day(value: datetime | None) -> date:
    return value.date() if value is not None else date.today()


def _resolve(store: EntryStore, entry_id: str) -> JournalEntry:
    """Find an entry by id or unique id prefix, or exit."""
    matches = [e for e in store.all_entries() if e.id.startswith(entry_id)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        console.print(f"[red]Error:[/red] No entry with id {entry_id}")
    else:
        console.print(f"[red]Error:[/red] Id prefix {entry_id} matches {len(matches)} entries")
    raise typer.Exit(1)


def _rejected(entry: JournalEntry) -> NoReturn:
    reason = "it is locked" if entry.is_locked else f"{entry.date} is a past day"
    console.print(f"[yellow]Entry {entry.id[:8]} was not changed: {reason}.[/yellow]")
    raise typer.Exit(1)


def _entry_table(entries: list[JournalEntry], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Id", style="dim")
    table.add_column("Date")
    table.add_column("Mood")
    table.add_column("Tags")
    table.add_column("Words", justify="right")
    table.add_column("Flags")
    for entry in entries:
        flags = ("locked " if entry.is_locked else "") + ("bookmarked" if entry.is_bookmarked else "")
        table.add_row(
            entry.id[:8],
            entry.date.isoformat(),
            entry.mood or "",
            ", ".join(entry.tags),
            str(entry.word_count),
            flags.strip(),
        )
    return table


def _range_for(choice: StatsRange, entries: list[JournalEntry], today: date) -> DateRange:
    match choice:
        case StatsRange.WEEK_DAYS:
            return DateRange.last_days(7, today)
        case StatsRange.MONTH_DAYS:
            return DateRange.last_days(30, today)
        case StatsRange.THIS_WEEK:
            return DateRange.this_week(today)
        case StatsRange.THIS_MONTH:
            return DateRange.this_month(today)
        case StatsRange.ALL_TIME:
            return DateRange.all_time(entries, today)


# ── Entry commands ───────────────────────────────────────────────


@app.command()
def write(
    ctx: typer.Context,
    content: Annotated[str, typer.Argument(help="Entry text (markup allowed).")],
    on: Annotated[
        Optional[datetime],
        typer.Option("--date", formats=DATE_FORMATS, help="Day of the entry (YYYY-MM-DD)."),
    ] = None,
    mood: Annotated[Optional[Mood], typer.Option("--mood", "-m", help="Mood for the entry.")] = None,
    tag: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="Tag (repeatable)."),
    ] = None,
) -> None:
    """Create a new entry."""
    store = _entry_store(ctx)
    entry = store.create_entry(_day(on), content, mood, tag or [])
    console.print(
        f"[green]Saved entry {entry.id[:8]}[/green] for {entry.date} ({entry.word_count} words)"
    )


@app.command()
def today(
    ctx: typer.Context,
    on: Annotated[
        Optional[datetime],
        typer.Option("--date", formats=DATE_FORMATS, help="Day to show (YYYY-MM-DD)."),
    ] = None,
) -> None:
    """List the entries of a day."""
    store = _entry_store(ctx)
    day = _day(on)
    entries = store.day_entries(day)
    if not entries:
        console.print(f"[yellow]No entries for {day}.[/yellow]")
        return
    console.print(_entry_table(entries, f"Entries for {day}"))
    selected = store.selected_entry(day)
    if selected is not None:
        console.print()
        console.print(selected.plain_text)
        for update in selected.updates:
            console.print(f"  [dim]{update.created_at:%Y-%m-%d %H:%M}[/dim] {update.content}")


@app.command()
def update(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id or unique prefix.")],
    content: Annotated[str, typer.Argument(help="Replacement text.")],
    mood: Annotated[Optional[Mood], typer.Option("--mood", "-m")] = None,
    tag: Annotated[Optional[list[str]], typer.Option("--tag", "-t")] = None,
) -> None:
    """Replace the content of today's entry (keeps mood and tags unless given)."""
    store = _entry_store(ctx)
    entry = _resolve(store, entry_id)
    result = store.update_entry(
        entry.id,
        content,
        mood if mood is not None else entry.mood,
        list(tag) if tag else entry.tags,
    )
    if result is None:
        _rejected(entry)
    console.print(f"[green]Updated entry {entry.id[:8]}[/green] ({result.word_count} words)")


@app.command()
def note(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id or unique prefix.")],
    text: Annotated[str, typer.Argument(help="Note to append.")],
) -> None:
    """Append a timestamped note to any entry, locked or not."""
    store = _entry_store(ctx)
    entry = _resolve(store, entry_id)
    store.add_entry_update(entry.id, text)
    console.print(f"[green]Added note to entry {entry.id[:8]}[/green]")


async def _stream_draft(store: EntryStore, entry: JournalEntry, stream: TextIO, delay: float) -> None:
    loop = asyncio.get_running_loop()
    content = entry.content
    async with AutosaveDebouncer(store, delay=delay) as debouncer:
        while line := await loop.run_in_executor(None, stream.readline):
            line = line.rstrip("\n")
            content = f"{content}\n{line}" if content else line
            debouncer.schedule(entry.id, content)
        debouncer.flush()


@app.command()
def draft(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id or unique prefix.")],
    autosave_delay: Annotated[
        Optional[float],
        typer.Option("--autosave-delay", min=0, help="Idle seconds before a save."),
    ] = None,
) -> None:
    """Append lines read from stdin to an entry, saving whenever input pauses.

    Mood and tags are left as they are.
    """
    config = merge_cli_overrides(_config(ctx), autosave_delay=autosave_delay)
    store = _entry_store(ctx)
    entry = _resolve(store, entry_id)
    if not store.is_editable(entry):
        _rejected(entry)
    asyncio.run(_stream_draft(store, entry, typer.get_text_stream("stdin"), config.editor.autosave_delay))
    saved = store.get_entry(entry.id)
    console.print(f"[green]Saved entry {entry.id[:8]}[/green] ({saved.word_count} words)")


@app.command()
def lock(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id or unique prefix.")],
) -> None:
    """Lock an entry permanently."""
    store = _entry_store(ctx)
    entry = _resolve(store, entry_id)
    store.lock_entry(entry.id)
    console.print(f"[green]Locked entry {entry.id[:8]}[/green]")


@app.command()
def bookmark(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id or unique prefix.")],
) -> None:
    """Toggle the bookmark on an entry."""
    store = _entry_store(ctx)
    entry = _resolve(store, entry_id)
    result = store.toggle_bookmark(entry.id)
    state = "Bookmarked" if result is not None and result.is_bookmarked else "Unbookmarked"
    console.print(f"[green]{state} entry {entry.id[:8]}[/green]")


@app.command()
def delete(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry id or unique prefix.")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation.")] = False,
) -> None:
    """Delete an entry."""
    store = _entry_store(ctx)
    entry = _resolve(store, entry_id)
    if not yes and not typer.confirm(f"Delete entry {entry.id[:8]} from {entry.date}?"):
        raise typer.Exit(1)
    store.delete_entry(entry.id)
    console.print(f"[green]Deleted entry {entry.id[:8]}[/green]")


@app.command()
def bookmarks(ctx: typer.Context) -> None:
    """List bookmarked entries."""
    entries = _entry_store(ctx).bookmarked_entries()
    if not entries:
        console.print("[yellow]No bookmarked entries.[/yellow]")
        return
    console.print(_entry_table(entries, "Bookmarks"))


# ── Index commands ───────────────────────────────────────────────


@app.command()
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Text to look for (case-insensitive).")],
    snippet_length: Annotated[
        Optional[int],
        typer.Option("--snippet-length", min=1, help="Characters of context per result."),
    ] = None,
) -> None:
    """Search entry text."""
    config = merge_cli_overrides(_config(ctx), snippet_length=snippet_length)
    index = SearchIndex(_entry_store(ctx), snippet_length=config.editor.snippet_length)
    results = index.search(query)
    if not results:
        console.print(f"[yellow]No entries match {query!r}.[/yellow]")
        return
    table = Table(title=f"{len(results)} result(s) for {query!r}")
    table.add_column("Id", style="dim")
    table.add_column("Date")
    table.add_column("Snippet")
    for entry in results:
        text = Text(index.snippet(entry, query))
        for start, end in highlight_spans(text.plain, query):
            text.stylize("bold yellow", start, end)
        table.add_row(entry.id[:8], entry.date.isoformat(), text)
    console.print(table)


@app.command()
def tags(
    ctx: typer.Context,
    tag: Annotated[Optional[str], typer.Argument(help="Show entries carrying this tag.")] = None,
) -> None:
    """List tags, or the entries carrying one tag."""
    index = TagIndex(_entry_store(ctx))
    if tag is not None:
        entries = index.get_entries_by_tag(tag)
        if not entries:
            console.print(f"[yellow]No entries tagged {tag!r}.[/yellow]")
            return
        console.print(_entry_table(entries, f"Tagged {tag.strip().lower()}"))
        return
    table = Table(title="Tags")
    table.add_column("Tag")
    table.add_column("Color")
    table.add_column("Entries", justify="right")
    for record in index.tag_records():
        table.add_row(f"[{record.color}]{record.name}[/]", record.color, str(record.count))
    console.print(table)


# ── Insight commands ─────────────────────────────────────────────


@app.command()
def stats(
    ctx: typer.Context,
    period: Annotated[
        StatsRange,
        typer.Option("--range", "-r", help="Range for word statistics."),
    ] = StatsRange.MONTH_DAYS,
) -> None:
    """Show streaks and word statistics."""
    entries = _entry_store(ctx).all_entries()
    analyzer = StreakAnalyzer()
    date_range = _range_for(period, entries, analyzer.today())
    summary = analyzer.writing_stats(entries, date_range)

    table = Table(title=f"Writing stats ({date_range.start} to {date_range.end})")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Current streak", f"{summary.current_streak} day(s)")
    table.add_row("Longest streak", f"{summary.longest_streak} day(s)")
    table.add_row("Entries in range", str(summary.total_entries))
    table.add_row("Words in range", str(summary.total_words))
    table.add_row("Average words per entry", str(summary.average_words_per_entry))
    table.add_row("Entries this month", str(summary.entries_this_month))
    console.print(table)

    reached = current_milestone(summary.current_streak)
    upcoming = next_milestone(summary.current_streak)
    if reached is not None:
        console.print(f"[green]Milestone:[/green] {reached.title} - {reached.description}")
    if upcoming is not None:
        pct = progress_to_next(summary.current_streak)
        console.print(f"Next: {upcoming.title} at {upcoming.days} days ({pct}% of the way)")


@app.command()
def mood(
    ctx: typer.Context,
    days: Annotated[
        Optional[int],
        typer.Option("--days", min=1, help="Look back this many days (default from config)."),
    ] = None,
) -> None:
    """Show mood patterns and insights over the recent window."""
    config = merge_cli_overrides(_config(ctx), window_days=days)
    analyzer = MoodAnalyzer(
        min_bucket_samples=config.insights.min_bucket_samples,
        min_mood_samples=config.insights.min_mood_samples,
        consistency_samples=config.insights.consistency_samples,
    )
    recent = analyzer.recent_mood_entries(
        _entry_store(ctx).all_entries(), days=config.insights.window_days
    )
    if not recent:
        console.print(
            f"[yellow]No mood-tagged entries in the last {config.insights.window_days} days.[/yellow]"
        )
        return
    summary = analyzer.summarize(recent)

    table = Table(title=f"Moods, last {config.insights.window_days} days")
    table.add_column("Mood")
    table.add_column("Entries", justify="right")
    for name, count in summary.counts.items():
        table.add_row(name, str(count))
    console.print(table)
    console.print(f"Positivity: {summary.positivity_rate}%")

    busiest_day = max(summary.by_day, key=lambda d: summary.by_day[d].total)
    busiest_time = max(summary.by_time, key=lambda t: summary.by_time[t].total)
    console.print(
        f"Most entries on {DAY_NAMES[busiest_day]}s, mostly in the {TIME_LABELS[busiest_time].lower()}"
    )

    for insight in analyzer.generate_insights(recent):
        style = _INSIGHT_STYLES[insight.kind]
        console.print(f"[{style}]{insight.title}[/{style}]: {insight.description}")


@app.command()
def memories(
    ctx: typer.Context,
    on: Annotated[
        Optional[datetime],
        typer.Option("--date", formats=DATE_FORMATS, help="Day to look back from (YYYY-MM-DD)."),
    ] = None,
) -> None:
    """Show entries written on this day in earlier years."""
    day = _day(on)
    groups = group_by_years_ago(_entry_store(ctx).all_entries(), day)
    if not groups:
        console.print(f"[yellow]No memories for {day:%B} {day.day}.[/yellow]")
        return
    for group in groups:
        label = "1 year ago" if group.years_ago == 1 else f"{group.years_ago} years ago"
        console.print(f"[bold]{label}[/bold]")
        for entry in group.entries:
            console.print(f"  {entry.date}  {entry.plain_text[:80]}")


@app.command()
def quote(
    on: Annotated[
        Optional[datetime],
        typer.Option("--date", formats=DATE_FORMATS, help="Day of the quote (YYYY-MM-DD)."),
    ] = None,
) -> None:
    """Show the quote of the day."""
    chosen = daily_quote(_day(on))
    console.print(f'"{chosen.text}"')
    console.print(f"[dim]- {chosen.author}[/dim]")


# ── Program commands ─────────────────────────────────────────────


@program_app.command("list")
def program_list(ctx: typer.Context) -> None:
    """List the guided programs and your progress."""
    config = _config(ctx)
    tracker = _tracker(ctx)
    table = Table(title="Guided programs")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Days", justify="right")
    table.add_column("Status")
    table.add_column("Done", justify="right")
    for program in GUIDED_PROGRAMS:
        progress = tracker.progress(config.user.id, program.id)
        table.add_row(
            program.id,
            program.name,
            str(program.duration),
            progress.status.value if progress is not None else "",
            f"{tracker.percent_complete(config.user.id, program.id)}%",
        )
    console.print(table)


def _require_program(tracker: ProgramProgressTracker, program_id: str) -> None:
    if tracker.program(program_id) is None:
        console.print(f"[red]Error:[/red] Unknown program {program_id}")
        raise typer.Exit(1)


@program_app.command("start")
def program_start(
    ctx: typer.Context,
    program_id: Annotated[str, typer.Argument(help="Program id, e.g. gratitude-30.")],
) -> None:
    """Start a guided program."""
    config = _config(ctx)
    tracker = _tracker(ctx)
    _require_program(tracker, program_id)
    progress = tracker.start_program(config.user.id, program_id)
    console.print(f"[green]{program_id}[/green]: day {progress.current_day} ({progress.status})")
    prompt = tracker.current_prompt(config.user.id, program_id)
    if prompt is not None:
        console.print(prompt)


@program_app.command("answer")
def program_answer(
    ctx: typer.Context,
    program_id: Annotated[str, typer.Argument(help="Program id.")],
    day: Annotated[int, typer.Argument(help="Day number (1-based).")],
    content: Annotated[str, typer.Argument(help="Your response.")],
    advance: Annotated[
        bool,
        typer.Option("--advance/--save-only", help="Complete the day, or only save a draft."),
    ] = True,
) -> None:
    """Answer one day's prompt of a guided program."""
    config = _config(ctx)
    tracker = _tracker(ctx)
    _require_program(tracker, program_id)
    try:
        if advance:
            tracker.complete_and_advance(config.user.id, program_id, day - 1, content)
        else:
            tracker.record_response(config.user.id, program_id, day - 1, content)
    except PageboundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)
    progress = tracker.progress(config.user.id, program_id)
    console.print(f"[green]Saved day {day}[/green] of {program_id} ({progress.status})")


@program_app.command("status")
def program_status(
    ctx: typer.Context,
    program_id: Annotated[str, typer.Argument(help="Program id.")],
) -> None:
    """Show progress through a guided program."""
    config = _config(ctx)
    tracker = _tracker(ctx)
    _require_program(tracker, program_id)
    progress = tracker.progress(config.user.id, program_id)
    console.print(f"[bold]{tracker.program(program_id).name}[/bold]")
    console.print(f"Status: {progress.status}")
    if progress.status is not ProgramStatus.NOT_STARTED:
        console.print(f"Day: {progress.current_day}")
    console.print(
        f"Responses: {len(tracker.responses(config.user.id, program_id))} "
        f"({tracker.completed_count(config.user.id, program_id)} completed)"
    )
    console.print(f"Progress: {tracker.percent_complete(config.user.id, program_id)}%")
    prompt = tracker.current_prompt(config.user.id, program_id)
    if prompt is not None and progress.status is ProgramStatus.IN_PROGRESS:
        console.print(f"Today's prompt: {prompt}")


@program_app.command("reset")
def program_reset(
    ctx: typer.Context,
    program_id: Annotated[str, typer.Argument(help="Program id.")],
) -> None:
    """Reset a guided program to not started.  Saved responses are kept."""
    config = _config(ctx)
    tracker = _tracker(ctx)
    _require_program(tracker, program_id)
    tracker.reset_program(config.user.id, program_id)
    console.print(f"[green]Reset {program_id}[/green]")
