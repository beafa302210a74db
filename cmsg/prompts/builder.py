"""Prompt Builder - Construct the completion prompt from change records."""

from typing import Sequence

from cmsg import COMMIT_TYPE_NAMES
from cmsg.changes.models import ChangeRecord

# Core types named in the prompt; the list ends with "etc."
PROMPT_COMMIT_TYPES = tuple(COMMIT_TYPE_NAMES[:7])

MAX_DESCRIPTION_LENGTH = 50


def build_changes_summary(changes: Sequence[ChangeRecord]) -> str:
    """Render one '- <kind>: <description>' line per change."""
    return "\n".join(f"- {change.change_kind}: {change.description}" for change in changes)


class PromptBuilder:
    """Builds the single-line commit message request."""

    def build(self, changes: Sequence[ChangeRecord]) -> str:
        sections = [
            self._build_role_section(),
            self._build_format_section(),
            self._build_rules_section(),
            self._build_changes_section(changes),
            self._build_final_instructions(),
        ]
        return "\n\n".join(sections)

    def _build_role_section(self) -> str:
        return ("You are a professional software developer. Write a concise, descriptive "
                "commit message for the code changes below.")

    def _build_format_section(self) -> str:
        return "Use the conventional commit format: <type>(<scope>): <description>"

    def _build_rules_section(self) -> str:
        types = ", ".join(PROMPT_COMMIT_TYPES)
        return f"""Rules:
1. Use a conventional commit type: {types}, etc.
2. Keep the description under {MAX_DESCRIPTION_LENGTH} characters
3. Be specific about what changed
4. Use the imperative mood ("add", not "added")
5. Focus on why the change was made, not only what changed"""

    def _build_changes_section(self, changes: Sequence[ChangeRecord]) -> str:
        return f"Changes:\n{build_changes_summary(changes)}"

    def _build_final_instructions(self) -> str:
        return "Reply with the commit message only, no additional text:"
