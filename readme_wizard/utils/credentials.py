from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from rich.console import Console
from rich.prompt import Confirm, Prompt

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".readme-wizard"
CONFIG_FILE_NAME = "config.json"
MIN_KEY_LENGTH = 10


class CredentialStoreError(Exception):
    """Raised when the stored configuration cannot be written or removed."""


class MissingApiKeyError(RuntimeError):
    """Raised when no API key could be resolved from any source."""


class StoredConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(..., alias="apiKey", min_length=1)


def config_dir(home: Optional[Path] = None) -> Path:
    return (home or Path.home()) / CONFIG_DIR_NAME


class CredentialStore:
    """Whole-file access to the per-user ``config.json``."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path else config_dir() / CONFIG_FILE_NAME

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[str]:
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return StoredConfig.model_validate(raw).api_key
        except FileNotFoundError:
            return None
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable configuration at %s: %s", self._path, exc)
            return None

    def save(self, api_key: str) -> None:
        payload = StoredConfig(api_key=api_key).model_dump(by_alias=True)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            raise CredentialStoreError(f"Could not save configuration to {self._path}: {exc}") from exc
        logger.debug("Saved API key to %s", self._path)

    def clear(self) -> bool:
        """Delete the stored configuration; returns False when there was none."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise CredentialStoreError(f"Could not remove {self._path}: {exc}") from exc
        return True


def _validate_key(value: str) -> Optional[str]:
    if not value:
        return "API key is required"
    if len(value) < MIN_KEY_LENGTH:
        return "This doesn't look like a valid API key"
    return None


def prompt_for_api_key(console: Console, *, key_url: str) -> str:
    console.print("[yellow]\nNo API key found. You need an API key to use this tool.[/yellow]")
    console.print(f"[grey50]You can create one at: {key_url}\n[/grey50]")
    while True:
        value = Prompt.ask("Please enter your API key", console=console, password=True).strip()
        problem = _validate_key(value)
        if problem is None:
            return value
        console.print(f"[red]{problem}[/red]")


def resolve_api_key(
    *,
    flag_key: Optional[str],
    env_var: str,
    store: CredentialStore,
    console: Console,
    key_url: str,
    interactive: bool = True,
) -> str:
    """Find an API key: flag (persisted), environment, stored file, then prompt."""
    if flag_key:
        store.save(flag_key)
        return flag_key

    env_key = os.getenv(env_var)
    if env_key:
        return env_key

    stored_key = store.load()
    if stored_key:
        return stored_key

    if not interactive:
        raise MissingApiKeyError(f"No API key provided. Set {env_var} or pass --api-key.")

    api_key = prompt_for_api_key(console, key_url=key_url)
    if Confirm.ask("Would you like to save this API key for future use?", console=console, default=True):
        store.save(api_key)
        console.print("[green]\nAPI key saved successfully! You won't need to enter it again.\n[/green]")
    return api_key
