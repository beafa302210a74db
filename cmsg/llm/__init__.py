"""LLM Client Package"""

from cmsg.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT, MAX_TOKENS, TEMPERATURE
from cmsg.llm.claude import ClaudeClient
from cmsg.llm.openai import OpenAIClient
from cmsg.llm.ollama import OllamaClient

PROVIDERS = {
    "claude": ClaudeClient,
    "openai": OpenAIClient,
    "ollama": OllamaClient,
}

# Hosted providers only; auto never probes a local server
AUTO_DETECT_ORDER = ["claude", "openai"]


def get_client(
    provider: str = "auto",
    api_key: str | None = None,
    model: str | None = None,
    host: str | None = None,
    timeout: float | None = None,
    api_keys: dict[str, str] | None = None,
) -> LLMClient:
    """Get an LLM client. Provider can be 'claude', 'openai', 'ollama', or 'auto'.

    api_keys maps provider names to credentials. For 'auto' the first
    provider in AUTO_DETECT_ORDER with a credential wins; a bare api_key
    counts for every provider.
    """
    if provider == "ollama":
        return OllamaClient(model=model, host=host, timeout=timeout)

    if provider in PROVIDERS:
        key = api_key or (api_keys or {}).get(provider)
        return PROVIDERS[provider](api_key=key, model=model, timeout=timeout)

    if provider == "auto":
        for name in AUTO_DETECT_ORDER:
            key = (api_keys or {}).get(name) or api_key
            if key:
                return PROVIDERS[name](api_key=key, model=model, timeout=timeout)

        raise LLMError(
            "No LLM credentials available.\n\n"
            "  export ANTHROPIC_API_KEY='your-key-here'\n"
            "  or: export OPENAI_API_KEY='your-key-here'"
        )

    if provider == "none":
        raise LLMError("LLM generation disabled.")

    raise LLMError(f"Unknown provider: {provider}. Use 'claude', 'openai', 'ollama', 'auto', or 'none'.")


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "OpenAIClient",
    "OllamaClient",
    "get_client",
    "PROVIDERS",
    "AUTO_DETECT_ORDER",
    "SYSTEM_PROMPT",
    "MAX_TOKENS",
    "TEMPERATURE",
]
