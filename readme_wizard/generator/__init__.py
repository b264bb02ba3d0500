"""Prompt construction and the README generation client."""

from .client import PROVIDERS, GenerationError, ReadmeGenerator, build_client, get_provider
from .fences import EmptyGenerationError, strip_fences
from .prompt import SYSTEM_PROMPT, build_prompt

__all__ = [
    "PROVIDERS",
    "SYSTEM_PROMPT",
    "EmptyGenerationError",
    "GenerationError",
    "ReadmeGenerator",
    "build_client",
    "build_prompt",
    "get_provider",
    "strip_fences",
]
