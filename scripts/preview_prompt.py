from __future__ import annotations

import argparse
import sys
from pathlib import Path

from readme_wizard.generator import build_prompt
from readme_wizard.profiler import analyze_project


def render_preview(root: Path, project_name: str | None = None, description: str | None = None) -> str:
    """Return the generation request for ``root`` without calling a model."""
    root = Path(root).resolve()
    profile = analyze_project(root)
    return build_prompt(profile, project_name or profile.name or root.name, description)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the README prompt for a project directory.")
    parser.add_argument("path", nargs="?", default=".", help="Project directory (defaults to cwd).")
    parser.add_argument("--name", help="Project name override.")
    parser.add_argument("--description", help="Project description override.")
    args = parser.parse_args(argv)
    sys.stdout.write(render_preview(Path(args.path), args.name, args.description) + "\n")


if __name__ == "__main__":
    main()
