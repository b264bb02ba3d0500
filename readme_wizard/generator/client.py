from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import anthropic
import openai
from rich.console import Console

from readme_wizard.utils.transcript import TranscriptWriter

from .fences import EmptyGenerationError, strip_fences
from .prompt import SYSTEM_PROMPT


def _truncate(value: str, limit: int = 100) -> str:
    """Collapse whitespace and trim strings to a compact preview."""
    collapsed = " ".join(str(value).split())
    if len(collapsed) <= limit:
        return collapsed
    return f"{collapsed[: limit - 3]}..."


@dataclass(frozen=True)
class Provider:
    name: str
    env_var: str
    default_model: str
    key_url: str


PROVIDERS: Dict[str, Provider] = {
    "openai": Provider(
        name="openai",
        env_var="OPENAI_API_KEY",
        default_model="gpt-4o-mini",
        key_url="https://platform.openai.com/api-keys",
    ),
    "anthropic": Provider(
        name="anthropic",
        env_var="ANTHROPIC_API_KEY",
        default_model="claude-3-5-haiku-latest",
        key_url="https://console.anthropic.com/settings/keys",
    ),
}
DEFAULT_PROVIDER = "openai"


def get_provider(name: str) -> Provider:
    try:
        return PROVIDERS[name]
    except KeyError as exc:
        raise ValueError(f"Unsupported LLM provider: {name}") from exc


class GenerationError(RuntimeError):
    """Raised when the model call fails or returns nothing usable."""

    def __init__(self, message: str, *, unauthorized: bool = False) -> None:
        super().__init__(message)
        self.unauthorized = unauthorized


def build_client(provider: str, api_key: str) -> Any:
    if provider == "anthropic":
        return anthropic.Anthropic(api_key=api_key)
    if provider == "openai":
        return openai.OpenAI(api_key=api_key)
    raise ValueError(f"Unsupported LLM provider: {provider}")


class ReadmeGenerator:
    """Sends a single README request to the configured provider."""

    DEFAULT_MAX_TOKENS = 8192

    def __init__(
        self,
        client: Any,
        *,
        provider: str = DEFAULT_PROVIDER,
        model: Optional[str] = None,
        console: Optional[Console] = None,
    ) -> None:
        self._client = client
        self._provider = get_provider(provider)
        self._model = model or self._provider.default_model
        self._console = console or Console()

    @property
    def model(self) -> str:
        return self._model

    @property
    def provider(self) -> str:
        return self._provider.name

    def generate(
        self,
        prompt: str,
        *,
        verbose: bool = False,
        transcript: TranscriptWriter | None = None,
    ) -> str:
        """Request README text for ``prompt`` and return it without wrapping fences."""
        if verbose:
            self._console.print(f"[yellow]Model:[/yellow] {self._provider.name}/{self._model}")
            self._console.print(f"[yellow]Prompt:[/yellow] {_truncate(prompt)}")
        if transcript:
            transcript.log_prompt(prompt)

        try:
            raw_text = self._request(prompt)
        except (anthropic.AuthenticationError, openai.AuthenticationError) as exc:
            raise GenerationError(str(exc), unauthorized=True) from exc
        except (anthropic.APIError, openai.APIError) as exc:
            raise GenerationError(str(exc)) from exc

        if transcript:
            transcript.log_response(raw_text)

        try:
            text = strip_fences(raw_text)
        except EmptyGenerationError as exc:
            raise GenerationError(str(exc)) from exc

        if verbose:
            self._console.print(f"[magenta]Response:[/magenta] {_truncate(text)}")
        return text

    def _request(self, prompt: str) -> str:
        if self._provider.name == "anthropic":
            return self._request_anthropic(prompt)
        return self._request_openai(prompt)

    def _request_anthropic(self, prompt: str) -> str:
        response = self._client.messages.create(
            model=self._model,
            max_tokens=self.DEFAULT_MAX_TOKENS,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": [{"type": "text", "text": prompt}]}],
        )
        parts: List[str] = [
            getattr(block, "text", "")
            for block in response.content
            if getattr(block, "type", None) == "text"
        ]
        return "\n".join(parts)

    def _request_openai(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
