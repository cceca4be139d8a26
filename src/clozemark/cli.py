"""Command-line preview for cloze markup.

Shows how an HTML fragment is scanned: the blanks with their surrounding
highlights, and the anchored HTML handed to the renderer.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from clozemark.models.elements import Blank, IncorrectAnswer

if TYPE_CHECKING:
    from clozemark.cloze import Cloze
    from clozemark.config import Settings

console = Console()


def _build_preview_parser() -> argparse.ArgumentParser:
    """Build argparse parser for clozemark-preview."""
    parser = argparse.ArgumentParser(
        prog="clozemark-preview",
        description="Scan cloze markup and show blanks, highlights and anchors.",
    )
    parser.add_argument("html_file", type=Path, help="HTML fragment to scan")
    parser.add_argument(
        "--answers",
        type=Path,
        default=None,
        help=(
            'JSON list of answers: "a/b" strings or objects with "answers", '
            '"hint", "case_sensitive" and "incorrect_answers"'
        ),
    )
    parser.add_argument(
        "--html-only", action="store_true", help="Print only the anchored HTML"
    )
    return parser


def _incorrect_from_json(entry: Any, index: int) -> IncorrectAnswer:
    if isinstance(entry, str):
        return IncorrectAnswer(text=entry)
    if isinstance(entry, dict) and isinstance(entry.get("text"), str):
        feedback = entry.get("feedback", "")
        if not isinstance(feedback, str):
            msg = f"answer #{index}: incorrect answer 'feedback' must be a string"
            raise ValueError(msg)
        return IncorrectAnswer(text=entry["text"], feedback=feedback)
    msg = (
        f"answer #{index}: incorrect answers must be strings or objects "
        "with a 'text' string"
    )
    raise ValueError(msg)


def _blank_from_json(entry: Any, index: int) -> Blank:
    """Build one answer template from a JSON list entry."""
    if isinstance(entry, str):
        return Blank.from_author_text(entry)
    if not (isinstance(entry, dict) and isinstance(entry.get("answers"), list)):
        msg = f"answer #{index} must be a string or an object with an 'answers' list"
        raise ValueError(msg)

    case_sensitive = entry.get("case_sensitive", False)
    if not isinstance(case_sensitive, bool):
        msg = f"answer #{index}: 'case_sensitive' must be true or false"
        raise ValueError(msg)
    incorrect = entry.get("incorrect_answers", [])
    if not isinstance(incorrect, list):
        msg = f"answer #{index}: 'incorrect_answers' must be a list"
        raise ValueError(msg)

    return Blank(
        correct_answers=[str(a) for a in entry["answers"]],
        hint=str(entry.get("hint", "")),
        incorrect_answers=[_incorrect_from_json(e, index) for e in incorrect],
        case_sensitive=case_sensitive,
    )


def load_answers(path: Path) -> list[Blank]:
    """Read answer templates from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the JSON is malformed or has the wrong shape.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        msg = "answers file must contain a JSON list"
        raise ValueError(msg)
    return [_blank_from_json(entry, i) for i, entry in enumerate(data)]


def _render_cloze(cloze: Cloze, con: Console) -> None:
    """Print blanks with their linked highlights as a Rich table."""
    if not cloze.blanks:
        con.print("[yellow]No blanks found.[/]")
    else:
        table = Table(title="Blanks")
        table.add_column("Id", style="cyan")
        table.add_column("Answers")
        table.add_column("Highlights before")
        table.add_column("Highlights after")
        for blank in cloze.blanks:
            table.add_row(
                blank.id,
                escape(" / ".join(blank.correct_answers)),
                escape(", ".join(h.text for h in cloze.highlights_before(blank))),
                escape(", ".join(h.text for h in cloze.highlights_after(blank))),
            )
        con.print(table)

    con.print(f"Highlights: {len(cloze.highlights)}")
    if cloze.unlinked_blank_markers:
        con.print(
            f"[yellow]Unlinked blank markers:[/] {cloze.unlinked_blank_markers}"
        )
    con.print(Panel(Text(cloze.html), title="Anchored HTML", expand=False))


def _load_settings(con: Console) -> Settings | None:
    """Load settings, printing validation errors instead of raising."""
    from clozemark.config import get_settings

    try:
        return get_settings()
    except ValidationError as exc:
        con.print(f"[red]Error:[/] invalid configuration\n{escape(str(exc))}")
        return None


def run_preview(argv: list[str], *, con: Console | None = None) -> int:
    """Run the preview command and return its exit code.

    ``CLOZE__*`` environment settings apply here, at the command's edge;
    ``create_cloze`` itself only sees the config passed to it.
    """
    from clozemark.cloze import create_cloze

    con = con or console
    args = _build_preview_parser().parse_args(argv)

    settings = _load_settings(con)
    if settings is None:
        return 1

    try:
        html = args.html_file.read_text(encoding="utf-8")
        blanks = load_answers(args.answers) if args.answers else []
    except (OSError, ValueError) as exc:
        con.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1

    cloze = create_cloze(html, blanks, config=settings.cloze)
    if args.html_only:
        con.print(cloze.html, markup=False, highlight=False)
    else:
        _render_cloze(cloze, con)
    return 0


def preview() -> None:
    """Scan a cloze HTML file and print the result.

    Usage:
        clozemark-preview exercise.html --answers answers.json
    """
    from clozemark import _setup_logging

    settings = _load_settings(console)
    if settings is None:
        sys.exit(1)
    _setup_logging(settings.app.log_dir, settings.app.log_level)
    sys.exit(run_preview(sys.argv[1:]))

