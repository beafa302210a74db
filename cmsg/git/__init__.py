"""Git Operations Package"""

from cmsg.git.analyzer import GitAnalyzer, GitError, manual_change, parse_porcelain, status_to_kind

__all__ = [
    "GitAnalyzer",
    "GitError",
    "manual_change",
    "parse_porcelain",
    "status_to_kind",
]
