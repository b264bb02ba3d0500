from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, Iterable

from rich.console import Console
from rich.prompt import Prompt

from readme_wizard import __version__
from readme_wizard.generator import GenerationError, ReadmeGenerator, build_client, build_prompt, get_provider
from readme_wizard.generator.client import DEFAULT_PROVIDER, PROVIDERS, Provider
from readme_wizard.profiler import ProjectProfile, analyze_project
from readme_wizard.utils.credentials import (
    CredentialStore,
    CredentialStoreError,
    MissingApiKeyError,
    config_dir,
    resolve_api_key,
)
from readme_wizard.utils.logger import setup_logging
from readme_wizard.utils.output import choose_output_path, write_readme
from readme_wizard.utils.transcript import TranscriptWriter

PROGRAM = "readme-wizard"

console = Console()
logger = logging.getLogger(__name__)


def _get_commit_id(root: Path) -> str | None:
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "HEAD"],
                cwd=root,
                stderr=subprocess.DEVNULL,
            )
            .decode("utf-8")
            .strip()
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


def _maybe_build_transcript(
    *,
    root: Path,
    provider: str,
    model: str,
    project_name: str,
    save_transcript: bool,
) -> TranscriptWriter | None:
    if not save_transcript:
        return None

    metadata: Dict[str, Any] = {
        "project": project_name,
        "root": str(root),
        "provider": provider,
        "model": model,
        "version": __version__,
    }
    commit_id = _get_commit_id(root)
    if commit_id:
        metadata["commit"] = commit_id

    return TranscriptWriter(base_dir=config_dir() / "transcripts", metadata=metadata)


def _is_interactive() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def _finish_transcript(transcript: TranscriptWriter | None, exit_code: int, output_path: Path | None = None) -> None:
    if transcript is None:
        return
    path = transcript.finish(exit_code, output_path)
    console.print(f"[grey50]Transcript saved to {path}[/grey50]")


def clear_config(store: CredentialStore) -> int:
    try:
        store.clear()
    except CredentialStoreError as exc:
        console.print(f"[red]Error clearing configuration: {exc}[/red]")
        return 1
    console.print("[green]Configuration cleared successfully![/green]")
    return 0


def report_generation_failure(error: GenerationError, provider: Provider) -> None:
    console.print(f"[red]\nError generating README content:[/red] {error}")
    if error.unauthorized:
        console.print("[yellow]\nThis might be due to an invalid API key. Please try clearing your saved configuration:[/yellow]")
        console.print(f"[grey50]{PROGRAM} --clear-config[/grey50]")
        console.print("[grey50]Then run the tool again with a valid API key.[/grey50]")
    else:
        console.print("[yellow]\nPlease try again. If the problem persists, you can:[/yellow]")
        console.print("[grey50]1. Check your internet connection[/grey50]")
        console.print(f"[grey50]2. Verify your API key at {provider.key_url}[/grey50]")
        console.print(f"[grey50]3. Try running with a new API key using: {PROGRAM} -k YOUR_NEW_API_KEY[/grey50]")


def ask_project_details(root: Path, profile: ProjectProfile) -> tuple[str, str]:
    project_name = Prompt.ask("What is your project name?", console=console, default=root.name)
    description = Prompt.ask(
        "Please provide a brief description of your project (press Enter to let AI generate it)",
        console=console,
        default="",
        show_default=False,
    )
    return project_name.strip() or profile.name or root.name, description


def run_wizard(args: argparse.Namespace, *, root: Path, store: CredentialStore) -> int:
    """Profile ``root``, generate README text and write it. Returns the exit code."""
    provider = get_provider(args.provider)
    model = args.model or provider.default_model

    console.print("[blue]Welcome to README Wizard! 📚[/blue]")
    console.print("[grey50]Analyzing your project...\n[/grey50]")

    output_path = choose_output_path(root, console)
    profile = analyze_project(root)
    console.print("[grey50]Project analysis complete!\n[/grey50]")

    project_name, description = ask_project_details(root, profile)
    prompt = build_prompt(profile, project_name, description)

    try:
        api_key = resolve_api_key(
            flag_key=args.api_key,
            env_var=provider.env_var,
            store=store,
            console=console,
            key_url=provider.key_url,
            interactive=_is_interactive(),
        )
    except MissingApiKeyError as exc:
        console.print(f"[red]\nError: {exc}[/red]")
        console.print(f"[grey50]You can get an API key at: {provider.key_url}[/grey50]")
        return 1

    generator = ReadmeGenerator(
        build_client(provider.name, api_key),
        provider=provider.name,
        model=model,
        console=console,
    )
    transcript = _maybe_build_transcript(
        root=root,
        provider=provider.name,
        model=model,
        project_name=project_name,
        save_transcript=args.save_transcript,
    )

    console.print("[grey50]\nGenerating README content using AI...\n[/grey50]")
    try:
        content = generator.generate(prompt, verbose=args.verbose, transcript=transcript)
    except GenerationError as exc:
        report_generation_failure(exc, provider)
        _finish_transcript(transcript, 1)
        return 1

    write_readme(output_path, content)
    console.print(f"[green]\n✨ {output_path.name} has been successfully created![/green]")
    console.print("[grey50]\nFeel free to edit it further to match your needs.[/grey50]")
    _finish_transcript(transcript, 0, output_path)
    return 0


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        description="An interactive CLI tool to generate README files for your projects using AI.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-k", "--api-key", help="API key for the selected provider (saved for future runs).")
    parser.add_argument(
        "--clear-config",
        action="store_true",
        help="Clear saved configuration including the API key.",
    )
    parser.add_argument(
        "--provider",
        choices=sorted(PROVIDERS),
        default=DEFAULT_PROVIDER,
        help=f"LLM provider used for generation (defaults to {DEFAULT_PROVIDER}).",
    )
    parser.add_argument("--model", help="Model identifier (defaults to the provider's default model).")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show profiling details and a preview of the prompt and response.",
    )
    parser.add_argument(
        "--save-transcript",
        action="store_true",
        help="Save a JSON record of the prompt, response and outcome under ~/.readme-wizard/transcripts.",
    )
    return parser.parse_args(None if argv is None else list(argv))


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    store = CredentialStore()

    if args.clear_config:
        return clear_config(store)

    try:
        return run_wizard(args, root=Path.cwd(), store=store)
    except (KeyboardInterrupt, EOFError):
        console.print("\n[grey50]Cancelled.[/grey50]")
        return 1
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        console.print(f"[red]An error occurred:[/red] {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
