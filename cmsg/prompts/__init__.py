"""Prompt Construction Package"""

from cmsg.prompts.builder import PromptBuilder, build_changes_summary, PROMPT_COMMIT_TYPES

__all__ = ["PromptBuilder", "build_changes_summary", "PROMPT_COMMIT_TYPES"]
