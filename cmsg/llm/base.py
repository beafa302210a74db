"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


SYSTEM_PROMPT = ("You are a helpful assistant that generates commit messages "
                 "following conventional commit standards.")

# One short subject line; keep sampling close to deterministic
MAX_TOKENS = 100
TEMPERATURE = 0.3


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for completion providers."""

    @abstractmethod
    def generate(self, prompt: str) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
