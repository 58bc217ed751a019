"""
Style check for generated articles.

The house style is only ever requested from the model in the system
instruction. This checker scans the returned Markdown for the same rules so
the page can flag drift. It is advisory: nothing here blocks an article.

Usage:
    from ghostwriter.style_check import check_style

    report = check_style(document.content)
    if not report.passed:
        print(format_style_report(report))
"""

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from ghostwriter.markdown_content import DIRECTIVE_PATTERN
from ghostwriter.prompts import ALLOWED_HEADING_LEVELS, BANNED_PHRASES, FORMULAIC_TRANSITIONS

_HEADING_RE = re.compile(r"^(#{1,6})\s")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")


def _phrase_pattern(phrase: str) -> re.Pattern:
    # "unlock" should also catch "unlocks" / "unlocking"
    return re.compile(r"\b" + re.escape(phrase).replace(r"\ ", r"\s+") + r"\w*", re.IGNORECASE)


_BANNED_PATTERNS = [(p, _phrase_pattern(p)) for p in BANNED_PHRASES]
# Transitions only count at the start of a sentence
_TRANSITION_PATTERNS = [
    (t, re.compile(r"(?:^|[.!?]\s+)" + re.escape(t) + r"\b"))
    for t in FORMULAIC_TRANSITIONS
]


@dataclass
class StyleReport:
    """Result of checking one article."""
    banned_phrases: List[Dict[str, Any]] = field(default_factory=list)
    formulaic_transitions: List[Dict[str, Any]] = field(default_factory=list)
    heading_violations: List[Dict[str, Any]] = field(default_factory=list)
    fenced_directives: List[Dict[str, Any]] = field(default_factory=list)
    directive_count: int = 0

    @property
    def violation_count(self) -> int:
        return (
            len(self.banned_phrases)
            + len(self.formulaic_transitions)
            + len(self.heading_violations)
            + len(self.fenced_directives)
        )

    @property
    def passed(self) -> bool:
        return self.violation_count == 0

    def to_dict(self) -> dict:
        result = asdict(self)
        result["passed"] = self.passed
        return result


def _blank_directive(match: re.Match) -> str:
    # Keep the directive's newlines so line numbers match the original text
    return "\n" * match.group(0).count("\n")


def check_style(content: str) -> StyleReport:
    """Scan Markdown content line by line for style violations.

    Directives are blanked out of the whole text before the line scan. Their
    prompts are for the image model, not the reader, and may span lines.
    """
    directives = list(DIRECTIVE_PATTERN.finditer(content))
    report = StyleReport(directive_count=len(directives))
    prose = DIRECTIVE_PATTERN.sub(_blank_directive, content)
    fenced_lines = set()
    in_fence = False

    for line_num, line in enumerate(prose.split("\n"), 1):
        if _FENCE_RE.match(line):
            in_fence = not in_fence
            continue

        if in_fence:
            fenced_lines.add(line_num)
            continue

        heading = _HEADING_RE.match(line)
        if heading and len(heading.group(1)) not in ALLOWED_HEADING_LEVELS:
            report.heading_violations.append({
                "line_number": line_num,
                "level": len(heading.group(1)),
                "line_content": line.strip(),
            })

        for phrase, pattern in _BANNED_PATTERNS:
            for match in pattern.finditer(line):
                report.banned_phrases.append({
                    "line_number": line_num,
                    "phrase": phrase,
                    "match": match.group(0),
                })

        for transition, pattern in _TRANSITION_PATTERNS:
            if pattern.search(line.lstrip()):
                report.formulaic_transitions.append({
                    "line_number": line_num,
                    "transition": transition,
                })

    for match in directives:
        line_num = content.count("\n", 0, match.start()) + 1
        if line_num in fenced_lines:
            report.fenced_directives.append({
                "line_number": line_num,
                "match": match.group(0),
            })

    return report


def format_style_report(report: StyleReport) -> str:
    """Format a report into readable lines."""
    if report.passed:
        return f"[PASSED] No style violations ({report.directive_count} illustration(s))"

    lines = [f"[WARNING] {report.violation_count} style issue(s) found"]
    for v in report.banned_phrases:
        lines.append(f"  Line {v['line_number']}: banned phrase \"{v['match']}\"")
    for v in report.formulaic_transitions:
        lines.append(f"  Line {v['line_number']}: formulaic transition \"{v['transition']}\"")
    for v in report.heading_violations:
        lines.append(f"  Line {v['line_number']}: H{v['level']} heading (use ## or ###)")
    for v in report.fenced_directives:
        lines.append(f"  Line {v['line_number']}: illustration inside a code block")
    return "\n".join(lines)
