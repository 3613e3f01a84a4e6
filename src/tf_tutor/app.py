"""Interactive CLI application."""
import random
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from tf_tutor.bank import QuestionStore
from tf_tutor.config import settings
from tf_tutor.dashboard import get_area_scores, get_score_color, get_study_stats, get_weakest_area
from tf_tutor.db import SqliteStore
from tf_tutor.errors import NoQuestionsAvailableError, PersistenceError, TutorError
from tf_tutor.importer import import_file, load_bank
from tf_tutor.logging_config import get_logger, setup_logging
from tf_tutor.persistence import PersistenceAdapter
from tf_tutor.progress import ProgressTracker
from tf_tutor.selection import SelectionEngine

console = Console()
logger = get_logger(__name__)

EXIT_WORDS = ("q", "quit", "menu")


class SessionExitRequested(Exception):
    """Raised when the user leaves a quiz from inside a prompt."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


@dataclass
class Session:
    persistence: PersistenceAdapter
    tracker: ProgressTracker
    engine: SelectionEngine
    selected_areas: list[str]
    boost_factor: float


def build_session(store, bank_path: str, boost_factor: float = None, rng: random.Random = None) -> Session:
    """Load the bank, restore progress and wire up the engine."""
    persistence = PersistenceAdapter(store)
    questions = QuestionStore()
    questions.load(load_bank(persistence, bank_path))
    rng = rng or random.Random()
    tracker = ProgressTracker(questions, persistence, rng=rng)
    tracker.restore()
    engine = SelectionEngine(tracker, rng=rng)

    try:
        saved = persistence.load_selected_areas()
    except PersistenceError:
        logger.exception("Stored area selection is unreadable")
        saved = None
    # Stale selections may name areas the reloaded bank no longer has
    selected = [a for a in (saved or []) if a in questions.areas()] or questions.areas()
    return Session(persistence, tracker, engine, selected, boost_factor or settings.BOOST_FACTOR)


def parse_area_selection(raw: str, areas: list[str]) -> list[str]:
    """Turn ``"1,3"`` or ``"all"`` into area names. Unknown numbers are ignored."""
    raw = raw.strip().lower()
    if raw in ("", "all", "*"):
        return list(areas)
    chosen = []
    for part in raw.replace(" ", ",").split(","):
        if not part.isdigit():
            continue
        index = int(part) - 1
        if 0 <= index < len(areas) and areas[index] not in chosen:
            chosen.append(areas[index])
    return chosen


def show_welcome():
    console.print(Panel(
        "[bold]True or False?[/bold]\n[dim]Adaptive self-quiz[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("quiz", "Answer questions from the selected areas"),
        ("areas", "Choose which areas to practise"),
        ("summary", "Scores and progress by area"),
        ("import", "Add questions from a file"),
        ("reset", "Forget all progress"),
        ("clear-cache", "Reload the question bank on next start"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def run_quiz_session(session: Session, limit: int = None) -> tuple[int, int]:
    """Ask questions until the user quits or ``limit`` is reached. Returns (correct, answered)."""
    correct = answered = 0
    console.print(f"\n[bold]Quiz[/bold] — {', '.join(session.selected_areas)}  [dim](q to stop)[/dim]\n")
    try:
        while limit is None or answered < limit:
            question = session.engine.next_question(session.selected_areas, session.boost_factor)
            tag = " [red](review)[/red]" if session.tracker.is_incorrect(question) else ""
            console.print(f"[dim]{question.area}[/dim]{tag}")
            console.print(f"[bold]Q{answered + 1}.[/bold] {question.text}\n")
            answer = session_prompt("True or false", choices=["t", "f", *EXIT_WORDS])
            is_correct = (answer == "t") == question.is_true
            session.tracker.record_answer(question, is_correct)
            answered += 1
            if is_correct:
                console.print("[green]Correct![/green]\n")
                correct += 1
            else:
                truth = "true" if question.is_true else "false"
                console.print(f"[red]Incorrect.[/red] The statement is [green]{truth}[/green].\n")
    except SessionExitRequested:
        pass
    if answered:
        console.print(f"[bold]Score: {correct}/{answered} ({correct/answered*100:.0f}%)[/bold]\n")
    return correct, answered


def cmd_quiz(session: Session):
    try:
        run_quiz_session(session)
    except NoQuestionsAvailableError as e:
        console.print(f"[yellow]{e}. Use 'areas' to pick again.[/yellow]")


def cmd_areas(session: Session):
    areas = session.tracker.store.areas()
    for i, area in enumerate(areas, 1):
        mark = "[green]*[/green]" if area in session.selected_areas else " "
        console.print(f"  {mark} [cyan]{i}[/cyan]) {area}")
    raw = Prompt.ask("Areas (numbers separated by commas, or 'all')", default="all")
    chosen = parse_area_selection(raw, areas)
    if not chosen:
        console.print("[yellow]No valid areas chosen; selection unchanged.[/yellow]")
        return
    session.selected_areas = chosen
    try:
        session.persistence.save_selected_areas(chosen)
    except PersistenceError:
        logger.exception("Could not save area selection")
    console.print(f"[green]Practising: {', '.join(chosen)}[/green]")


def cmd_summary(session: Session):
    stats = get_study_stats(session.tracker)
    console.print(Panel(
        f"Viewed [bold]{stats['viewed_count']}[/bold] of {stats['question_count']} ({stats['viewed_pct']}%)  |  "
        f"To review: [bold]{stats['incorrect_count']}[/bold] ({stats['incorrect_pct']}%)",
        title="Progress", border_style="blue",
    ))

    table = Table(title="Areas")
    table.add_column("Area", style="cyan")
    table.add_column("Average", justify="right")
    table.add_column("Viewed", justify="right")
    table.add_column("Status")
    for row in get_area_scores(session.tracker):
        if row["score"] is None:
            table.add_row(row["area"], "-", f"{row['viewed']}/{row['total']}", "")
            continue
        color = get_score_color(row["score"])
        table.add_row(
            row["area"],
            f"{row['score']}%",
            f"{row['viewed']}/{row['total']}",
            f"[{color}]{row['label']}[/{color}]",
        )
    console.print(table)

    weakest = get_weakest_area(session.tracker)
    if weakest and weakest["score"] < 70:
        console.print(f"\n  [yellow]Recommendation: Focus on {weakest['area']}[/yellow]")


def cmd_import(session: Session):
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return
    result = import_file(session.tracker, file_path)
    console.print(f"[green]Read {result['read']} questions from {result['filename']}, added {result['added']}[/green]")


def cmd_reset(session: Session):
    if Confirm.ask("Forget all progress?", default=False):
        session.tracker.reset()
        console.print("[green]Progress cleared.[/green]")


def cmd_clear_cache(session: Session):
    session.persistence.clear_cached_questions()
    console.print("[green]Cached questions cleared; the bank will be reloaded next start.[/green]")


COMMANDS = {
    "quiz": cmd_quiz,
    "areas": cmd_areas,
    "summary": cmd_summary,
    "import": cmd_import,
    "reset": cmd_reset,
    "clear-cache": cmd_clear_cache,
}


def main():
    setup_logging()
    session = build_session(SqliteStore(settings.DB_PATH), settings.BANK_PATH)

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="quiz").strip().lower()
        try:
            if choice in ("quit", "exit", "q"):
                console.print("[dim]See you next time![/dim]")
                break
            command = COMMANDS.get(choice)
            if command is None:
                console.print("[red]Unknown command. Try again.[/red]")
                continue
            command(session)
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except TutorError as e:
            console.print(f"[red]{e}[/red]")
        except Exception as e:
            logger.exception("Command failed")
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
