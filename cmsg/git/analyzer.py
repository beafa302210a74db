"""Git Analyzer - Turn working tree changes into change records."""

import subprocess
from pathlib import Path

from cmsg.changes import ChangeKind, ChangeRecord, describe_changes, detect_language

# Porcelain status letter -> change kind. '?' is untracked.
STATUS_KINDS = {
    '?': ChangeKind.ADDED,
    'A': ChangeKind.ADDED,
    'M': ChangeKind.MODIFIED,
    'D': ChangeKind.DELETED,
    'R': ChangeKind.RENAMED,
    'C': ChangeKind.RENAMED,
}

DESCRIPTION_VERBS = {
    ChangeKind.ADDED: "Added",
    ChangeKind.MODIFIED: "Modified",
    ChangeKind.DELETED: "Deleted",
    ChangeKind.RENAMED: "Renamed",
}

MANUAL_INPUT_PATH = "manual-input"


class GitError(Exception):
    """Raised when git operations fail."""
    pass


def parse_porcelain(output: str) -> list[tuple[str, str]]:
    """Parse 'git status --porcelain=v1 -z' into (status, path) pairs.

    Renames and copies carry the original path as an extra NUL-separated
    entry; only the new path is kept.
    """
    entries = output.split('\0')
    results = []
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        status, path = entry[:2], entry[3:]
        if 'R' in status or 'C' in status:
            i += 1
        results.append((status, path))
    return results


def status_to_kind(status: str) -> ChangeKind | None:
    """Index status wins over worktree status. None for unknown codes."""
    if status == '??':
        return ChangeKind.ADDED
    code = status[0] if status[0] != ' ' else status[1]
    return STATUS_KINDS.get(code)


def manual_change(description: str) -> ChangeRecord:
    """A change record for a free-text description of the work."""
    return ChangeRecord(
        file_path=MANUAL_INPUT_PATH,
        description=description,
        change_kind=ChangeKind.MODIFIED,
    )


class GitAnalyzer:
    """Extracts working tree changes from git."""

    def __init__(self, repo_path: str | Path | None = None):
        self.repo_path = Path(repo_path) if repo_path else None
        self._verify_git_available()
        self._verify_in_repo()
        self.root = Path(self._run_git('rev-parse', '--show-toplevel').strip())

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace',
                cwd=self.repo_path,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def get_changes(self) -> list[ChangeRecord]:
        """Every changed file in the working tree, staged or not."""
        output = self._run_git('status', '--porcelain=v1', '-z', '--untracked-files=all')
        return [self._to_record(status, path) for status, path in parse_porcelain(output)]

    def _to_record(self, status: str, path: str) -> ChangeRecord:
        kind = status_to_kind(status)
        language = detect_language(path)

        if kind is None:
            kind = ChangeKind.MODIFIED
            description = f"Changed {path}"
        else:
            description = f"{DESCRIPTION_VERBS[kind]} {path}"

        if kind in (ChangeKind.ADDED, ChangeKind.MODIFIED):
            content = self._read_text(path)
            if content is not None:
                description = describe_changes(content, path, language)

        return ChangeRecord(
            file_path=path,
            description=description,
            change_kind=kind,
            language=language,
            lines_added=1 if kind == ChangeKind.ADDED else None,
            lines_deleted=1 if kind == ChangeKind.DELETED else None,
        )

    def _read_text(self, path: str) -> str | None:
        """File contents, or None for unreadable and binary files."""
        try:
            return (self.root / path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError):
            return None
