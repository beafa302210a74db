"""Heuristic Messages - Rule-based commit messages, no network needed."""

from typing import Sequence

from cmsg.changes.models import ChangeKind, ChangeRecord

EMPTY_MESSAGE = "chore: update code"

# Single change: kind -> (type, verb). Unrecognized kinds use MODIFIED.
SINGLE_CHANGE_RULES = {
    ChangeKind.ADDED: ("feat", "add"),
    ChangeKind.DELETED: ("chore", "remove"),
    ChangeKind.RENAMED: ("refactor", "rename"),
    ChangeKind.MODIFIED: ("fix", "update"),
}


def file_stem(file_path: str) -> str:
    """Final path segment up to its first dot, or 'file' if that is empty."""
    name = file_path.split('/')[-1]
    return name.split('.')[0] or 'file'


def _subject(commit_type: str, description: str, scope: str | None = None) -> str:
    if scope:
        return f"{commit_type}({scope}): {description}"
    return f"{commit_type}: {description}"


def _single_language(changes: Sequence[ChangeRecord]) -> str | None:
    """The shared language if exactly one distinct language is present."""
    languages = {c.language for c in changes if c.language}
    if len(languages) == 1:
        return next(iter(languages))
    return None


def single_change_message(change: ChangeRecord) -> str:
    commit_type, verb = SINGLE_CHANGE_RULES.get(change.change_kind, SINGLE_CHANGE_RULES[ChangeKind.MODIFIED])
    return _subject(commit_type, f"{verb} {file_stem(change.file_path)}", change.language)


def multi_change_message(changes: Sequence[ChangeRecord]) -> str:
    """Pick a message from the mix of change kinds. First matching rule wins."""
    kinds = {c.change_kind for c in changes}

    if ChangeKind.ADDED in kinds and ChangeKind.MODIFIED in kinds:
        return _subject("feat", "add new features and update existing code", _single_language(changes))

    if ChangeKind.DELETED in kinds:
        if ChangeKind.MODIFIED in kinds:
            return "refactor: restructure and remove unused code"
        return "chore: remove unused files"

    if ChangeKind.RENAMED in kinds:
        return "refactor: reorganize file structure"

    return _subject("fix", "resolve issues and improve code", _single_language(changes))


def generate_heuristic_message(changes: Sequence[ChangeRecord]) -> str:
    """Derive a conventional commit message from change kinds and languages."""
    if not changes:
        return EMPTY_MESSAGE
    if len(changes) == 1:
        return single_change_message(changes[0])
    return multi_change_message(changes)
