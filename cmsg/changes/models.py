"""Change Records - One entry per changed file."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChangeKind(str, Enum):
    """How a file changed in the working tree."""
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"

    def __str__(self) -> str:
        return self.value


LANGUAGE_MAP = {
    '.ts': 'typescript',
    '.tsx': 'typescript',
    '.js': 'javascript',
    '.jsx': 'javascript',
    '.py': 'python',
    '.java': 'java',
    '.cpp': 'cpp',
    '.c': 'c',
    '.cs': 'csharp',
    '.php': 'php',
    '.rb': 'ruby',
    '.go': 'go',
    '.rs': 'rust',
    '.swift': 'swift',
    '.kt': 'kotlin',
    '.scala': 'scala',
    '.html': 'html',
    '.css': 'css',
    '.scss': 'scss',
    '.less': 'less',
    '.json': 'json',
    '.xml': 'xml',
    '.yaml': 'yaml',
    '.yml': 'yaml',
    '.md': 'markdown',
}


def detect_language(file_path: str) -> Optional[str]:
    """Map a path's extension to a language name, or None if unlisted."""
    ext = os.path.splitext(file_path)[1].lower()
    return LANGUAGE_MAP.get(ext)


@dataclass(frozen=True)
class ChangeRecord:
    """A single changed file, as handed to message synthesis.

    lines_added / lines_deleted are markers (1 on added or deleted files),
    not diff line counts.
    """
    file_path: str
    description: str
    change_kind: ChangeKind = ChangeKind.MODIFIED
    language: Optional[str] = None
    lines_added: Optional[int] = None
    lines_deleted: Optional[int] = None
