"""Change Records Package"""

from cmsg.changes.models import ChangeKind, ChangeRecord, LANGUAGE_MAP, detect_language
from cmsg.changes.describer import describe_changes, count_lines

__all__ = [
    "ChangeKind",
    "ChangeRecord",
    "LANGUAGE_MAP",
    "detect_language",
    "describe_changes",
    "count_lines",
]
