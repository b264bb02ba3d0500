from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm, Prompt

README_NAME = "README.md"
ALTERNATE_NAME = "README.new"


def _with_extension(name: str) -> str:
    name = name.strip() or ALTERNATE_NAME
    if name.lower().endswith(".md"):
        name = name[:-3]
    return f"{name}.md"


def choose_output_path(root: Path, console: Console) -> Path:
    """Pick where the README goes, asking before an existing one is replaced."""
    target = Path(root) / README_NAME
    if not target.exists():
        return target

    overwrite = Confirm.ask(
        f"A {README_NAME} already exists. Would you like to overwrite it?",
        console=console,
        default=False,
    )
    if overwrite:
        return target

    new_name = Prompt.ask(
        "Enter a new name for the README file (without .md extension)",
        console=console,
        default=ALTERNATE_NAME,
    )
    return Path(root) / _with_extension(new_name)


def write_readme(path: Path, content: str) -> Path:
    path = Path(path)
    if not content.endswith("\n"):
        content += "\n"
    path.write_text(content, encoding="utf-8")
    return path
