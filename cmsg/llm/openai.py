"""OpenAI LLM Client"""

from cmsg.llm.base import LLMClient, LLMResponse, LLMError, SYSTEM_PROMPT, MAX_TOKENS, TEMPERATURE


class OpenAIClient(LLMClient):
    """OpenAI chat completions client. The API key is passed in by the caller."""

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(self, api_key: str | None = None, model: str | None = None, timeout: float | None = None):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL

        if not self.api_key:
            raise LLMError(
                "No API key found. Set OPENAI_API_KEY environment variable:\n"
                "  export OPENAI_API_KEY='your-key-here'"
            )

        try:
            from openai import OpenAI
        except ImportError:
            raise LLMError(
                "OpenAI SDK not installed. Run:\n"
                "  pip install openai"
            )
        options = {"api_key": self.api_key}
        if timeout:
            options["timeout"] = timeout
        self._client = OpenAI(**options)

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def generate(self, prompt: str) -> LLMResponse:
        from openai import APIError, AuthenticationError

        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ]
            )
        except AuthenticationError:
            raise LLMError("Invalid API key. Check your OPENAI_API_KEY.")
        except APIError as e:
            raise LLMError(f"OpenAI API error: {e.message}")

        content = ""
        if completion.choices:
            content = (completion.choices[0].message.content or "").strip()

        usage = completion.usage
        return LLMResponse(
            content=content,
            model=self.model,
            tokens_used=usage.total_tokens if usage else 0
        )
