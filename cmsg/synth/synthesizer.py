"""Message Synthesizer - One commit message per list of changes.

A completion provider is optional. Whatever it does (missing, raising,
returning nothing) the caller still gets the heuristic message.
"""

import logging
from typing import Sequence

from cmsg.changes.models import ChangeRecord
from cmsg.llm import LLMClient, LLMError, get_client
from cmsg.prompts import PromptBuilder
from cmsg.synth.heuristics import generate_heuristic_message

logger = logging.getLogger(__name__)


class MessageSynthesizer:
    """Generates commit messages, preferring the client when one is given."""

    def __init__(self, client: LLMClient | None = None, prompt_builder: PromptBuilder | None = None):
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()

    def generate(self, changes: Sequence[ChangeRecord]) -> str:
        if self.client is None:
            return generate_heuristic_message(changes)

        message = self._generate_with_client(changes)
        if message:
            return message
        return generate_heuristic_message(changes)

    def _generate_with_client(self, changes: Sequence[ChangeRecord]) -> str | None:
        """Completion text, or None when the provider fails or returns nothing."""
        try:
            prompt = self.prompt_builder.build(changes)
            response = self.client.generate(prompt)
            content = (response.content or "").strip() if response else ""
        except LLMError as e:
            logger.debug("%s failed, using heuristic message: %s", type(self.client).__name__, e)
            return None
        except Exception:
            logger.debug("%s raised unexpectedly, using heuristic message", type(self.client).__name__, exc_info=True)
            return None

        if not content:
            logger.debug("%s returned an empty completion, using heuristic message", type(self.client).__name__)
            return None
        return content


def resolve_client(provider: str = "auto", api_key: str | None = None, **options) -> LLMClient | None:
    """Build a client from explicit configuration, or None if that is not possible."""
    if provider == "none":
        return None
    try:
        return get_client(provider=provider, api_key=api_key, **options)
    except LLMError as e:
        logger.debug("No completion provider (%s): %s", provider, e)
        return None
    except Exception:
        logger.debug("Could not create %s client", provider, exc_info=True)
        return None


def generate_commit_message(
    changes: Sequence[ChangeRecord],
    provider: str = "auto",
    api_key: str | None = None,
    client: LLMClient | None = None,
    **options,
) -> str:
    """Generate a commit message for changes.

    An explicit client wins. Otherwise one is resolved from provider and
    api_key; without usable configuration the heuristic message is returned.
    Extra options (model, host, timeout, api_keys) go to get_client.
    """
    if client is None:
        client = resolve_client(provider, api_key, **options)
    return MessageSynthesizer(client=client).generate(changes)
