"""Interactive CLI application."""
import asyncio
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from patente_tutor.config import DEFAULT_DB_PATH, configure_logging
from patente_tutor.dashboard import get_progress_color, get_user_stats
from patente_tutor.db import init_db
from patente_tutor.explain import ExplanationClient
from patente_tutor.importer import import_file
from patente_tutor.models import ALL, Category, LearningItem
from patente_tutor.quiz import QuizRound, get_category_quiz_scores, get_quiz_score, record_quiz_answer
from patente_tutor.review import EmptyPoolError, select_next
from patente_tutor.seed import is_seeded, seed_vocabulary
from patente_tutor.vocabulary import add_custom_item, load_vocabulary, replace_item, save_item

console = Console()

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """User asked to leave the current quiz and go back to the menu."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


def session_int_prompt(prompt: str, choices: list[str]) -> int:
    answer = session_prompt(prompt, choices=[*choices, "q"])
    return int(answer)


def show_welcome():
    console.print(Panel(
        "[bold]PATENTE [italic]PRO[/italic][/bold]\n[dim]Smart Spaced Repetition[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("quiz", "Practice words"),
        ("add", "Add a custom word"),
        ("stats", "Progress by category"),
        ("import", "Import a word list"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<10}[/cyan] {desc}")


def show_round(quiz_round: QuizRound) -> None:
    item = quiz_round.item
    dots = "".join("●" if i < item.repetition else "○" for i in range(5))
    console.print(Panel(
        f"[bold]{item.prompt}[/bold]",
        title=item.category.label, subtitle=f"[cyan]{dots}[/cyan]", border_style="cyan",
    ))
    for i, option in enumerate(quiz_round.options, 1):
        console.print(f"  [cyan]{i})[/cyan] {option}")


def show_result(quiz_round: QuizRound) -> None:
    updated = quiz_round.updated_item
    if quiz_round.is_correct:
        console.print("[green]Correct![/green]")
    else:
        console.print(f"[red]Incorrect.[/red] Answer: [green]{updated.answer}[/green]")
    console.print(f"[dim]Next review in {updated.interval} days[/dim]")


def show_explanation(explainer: ExplanationClient, term: str) -> None:
    with console.status("Analyzing..."):
        text = asyncio.run(explainer.explain(term))
    console.print(Panel(text, title="AI Insight", border_style="magenta"))


def run_quiz_session(
    db_path: str,
    vocabulary: list[LearningItem],
    category=ALL,
    explainer: ExplanationClient | None = None,
    rng=None,
) -> tuple[list[LearningItem], int, int]:
    """Ask words until the user quits. Returns (vocabulary, correct, attempts)."""
    correct = attempts = 0
    try:
        while True:
            try:
                prompt = select_next(vocabulary, category, rng=rng)
            except EmptyPoolError:
                console.print("[yellow]No words in this category yet![/yellow]")
                break
            quiz_round = QuizRound.from_prompt(prompt)
            show_round(quiz_round)
            choice = session_int_prompt(
                "\nYour answer", choices=[str(i) for i in range(1, len(quiz_round.options) + 1)],
            )
            updated = quiz_round.answer(choice - 1)
            vocabulary = replace_item(vocabulary, updated)
            save_item(db_path, updated)
            record_quiz_answer(db_path, quiz_round.attempt)
            attempts += 1
            if quiz_round.is_correct:
                correct += 1
            show_result(quiz_round)

            hint = "[dim]Enter for next word, 'e' to explain, 'q' for menu[/dim]"
            if explainer is None:
                hint = "[dim]Enter for next word, 'q' for menu[/dim]"
            next_step = session_prompt(hint, default="")
            if next_step.strip().lower() == "e" and explainer is not None:
                show_explanation(explainer, updated.prompt)
                session_prompt("[dim]Enter for next word, 'q' for menu[/dim]", default="")
            console.print()
    except SessionExitRequested:
        pass
    if attempts:
        console.print(f"[bold]Score: {correct}/{attempts} ({correct/attempts*100:.0f}%)[/bold]\n")
    return vocabulary, correct, attempts


def choose_category(vocabulary: list[LearningItem]):
    console.print(f"  [cyan]0[/cyan]) Mixed training ({len(vocabulary)} words)")
    categories = list(Category)
    for i, category in enumerate(categories, 1):
        in_category = [item for item in vocabulary if item.category is category]
        learned = sum(1 for item in in_category if item.repetition > 0)
        console.print(f"  [cyan]{i}[/cyan]) {category.label} [dim]{learned}/{len(in_category)}[/dim]")
    picked = int(Prompt.ask("Category", choices=[str(i) for i in range(len(categories) + 1)], default="0"))
    return ALL if picked == 0 else categories[picked - 1]


def cmd_quiz(db_path: str, vocabulary: list[LearningItem], explainer=None) -> list[LearningItem]:
    console.print("\n[bold]Practice[/bold] [dim](type 'q' to return to the menu)[/dim]")
    category = choose_category(vocabulary)
    vocabulary, _, _ = run_quiz_session(db_path, vocabulary, category, explainer=explainer)
    return vocabulary


def cmd_add(db_path: str, vocabulary: list[LearningItem]) -> list[LearningItem]:
    prompt = Prompt.ask("Italiano")
    answer = Prompt.ask("中文")
    categories = list(Category)
    for i, category in enumerate(categories, 1):
        console.print(f"  [cyan]{i}[/cyan]) {category.label}")
    picked = int(Prompt.ask(
        "Category", choices=[str(i) for i in range(1, len(categories) + 1)],
        default=str(categories.index(Category.GENERAL) + 1),
    ))
    item = add_custom_item(db_path, prompt, answer, categories[picked - 1])
    console.print(f"[green]Saved {item.prompt} → {item.answer}[/green]")
    return [item] + vocabulary


def cmd_stats(db_path: str, vocabulary: list[LearningItem]) -> None:
    stats = get_user_stats(db_path, vocabulary)
    scores = get_category_quiz_scores(db_path)
    console.print(Panel(
        f"Mastered: [bold]{stats.mastered_count}[/bold]  |  "
        f"Learned: [bold]{stats.learned_count}[/bold]/{len(vocabulary)}  |  "
        f"Due: [bold]{stats.due_count}[/bold]  |  "
        f"Correct: [bold]{stats.total_correct}[/bold]/{stats.total_attempts} ({get_quiz_score(db_path)}%)",
        title="Progress", border_style="blue",
    ))
    table = Table(title="Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Learned", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Accuracy", justify="right")
    for row in stats.by_category:
        color = get_progress_color(row["percent"])
        score = scores.get(row["category"])
        table.add_row(
            row["label"],
            f"{row['learned']}/{row['total']}",
            f"[{color}]{row['percent']}%[/{color}]",
            "-" if score is None else f"{score}%",
        )
    console.print(table)


def cmd_import(db_path: str, vocabulary: list[LearningItem]) -> list[LearningItem]:
    file_path = Prompt.ask("File path")
    if not Path(file_path).exists():
        console.print(f"[red]File not found: {file_path}[/red]")
        return vocabulary
    result = import_file(db_path, file_path)
    console.print(
        f"[green]Imported {result['filename']}: {result['added']} new, {result['updated']} updated[/green]"
    )
    return load_vocabulary(db_path)


def main():
    configure_logging()
    db_path = DEFAULT_DB_PATH
    init_db(db_path)
    first_run = not is_seeded(db_path)
    if first_run:
        console.print("[dim]Setting up for first use...[/dim]")
    vocabulary = seed_vocabulary(db_path)
    if first_run:
        console.print("[green]Ready![/green]\n")
    explainer = ExplanationClient()

    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="quiz").strip().lower()
        try:
            if choice == "quiz":
                vocabulary = cmd_quiz(db_path, vocabulary, explainer if explainer.is_available else None)
            elif choice == "add":
                vocabulary = cmd_add(db_path, vocabulary)
            elif choice == "stats":
                cmd_stats(db_path, vocabulary)
            elif choice == "import":
                vocabulary = cmd_import(db_path, vocabulary)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]In bocca al lupo![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
