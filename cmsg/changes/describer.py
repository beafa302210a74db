"""Change Describer - Shallow token scans that enrich a file description.

These are pattern searches, not parsers: a string literal containing
"class Foo" counts as a class.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class ScanPatterns:
    """Token patterns for one language family."""
    classes: re.Pattern
    functions: re.Pattern
    imports: re.Pattern
    function_label: str = "functions"


_CLASS_RE = re.compile(r'class\s+(\w+)')

SCAN_PATTERNS: dict[str, ScanPatterns] = {
    'javascript': ScanPatterns(
        classes=_CLASS_RE,
        functions=re.compile(r'function\s+(\w+)|(\w+)\s*[:=]\s*(?:async\s*)?\('),
        imports=re.compile(r'import\s+.*from\s+[\'"`]([^\'"`]+)[\'"`]'),
    ),
    'python': ScanPatterns(
        classes=_CLASS_RE,
        functions=re.compile(r'def\s+(\w+)'),
        imports=re.compile(r'import\s+\w+|from\s+\w+\s+import'),
    ),
    'java': ScanPatterns(
        classes=_CLASS_RE,
        functions=re.compile(r'(?:public|private|protected)?\s*(?:static\s+)?\w+\s+(\w+)\s*\('),
        imports=re.compile(r'import\s+[\w.]+;'),
        function_label="methods",
    ),
}
SCAN_PATTERNS['typescript'] = SCAN_PATTERNS['javascript']


def _names(pattern: re.Pattern, content: str) -> list[str]:
    """First non-empty capture group of every match, in order."""
    names = []
    for match in pattern.finditer(content):
        name = next((g for g in match.groups() if g), None)
        if name:
            names.append(name)
    return names


def count_lines(content: str) -> int:
    return len(content.split('\n'))


def describe_changes(content: str, file_path: str, language: str | None = None) -> str:
    """Describe a changed file by the most significant tokens it contains.

    Precedence is classes, then functions (methods for Java), then imports,
    then a plain line count. Languages without scan patterns go straight to
    the line count.
    """
    patterns = SCAN_PATTERNS.get(language) if language else None
    if patterns is None:
        return f"Updated {file_path} ({count_lines(content)} lines)"

    class_names = _names(patterns.classes, content)
    if class_names:
        return f"Updated {file_path} - classes: {', '.join(class_names)}"

    function_names = _names(patterns.functions, content)
    if function_names:
        return f"Updated {file_path} - {patterns.function_label}: {', '.join(function_names)}"

    if patterns.imports.search(content):
        return f"Updated {file_path} - added imports"

    return f"Updated {file_path} ({count_lines(content)} lines)"
