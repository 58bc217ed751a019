"""
Directive-annotated Markdown splitting.

Generated articles carry inline illustration directives of the form
``![PROMPT: a visual description](placeholder)``. This module splits the
Markdown into alternating text and illustration segments, and classifies the
lines of text segments for display.

Usage:
    from ghostwriter.markdown_content import split_segments, render_blocks

    for segment in split_segments(document.content):
        ...
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Union


# Description is any run of characters without "]"; optional whitespace
# after "PROMPT:" is not part of it.
DIRECTIVE_PATTERN = re.compile(r"!\[PROMPT:\s*([^\]]*?)\]\(placeholder\)")


def format_directive(prompt: str) -> str:
    """Canonical directive syntax for a prompt."""
    return f"![PROMPT: {prompt}](placeholder)"


@dataclass(frozen=True)
class TextSegment:
    text: str

    @property
    def is_blank(self) -> bool:
        """Whitespace-only text renders as nothing."""
        return not self.text.strip()


@dataclass(frozen=True)
class IllustrationSegment:
    prompt: str
    # Exact source marker, kept so segments join back to the original text
    raw: str = field(default="", compare=False)

    def __post_init__(self):
        if not self.raw:
            object.__setattr__(self, "raw", format_directive(self.prompt))


Segment = Union[TextSegment, IllustrationSegment]


class SegmentSequence:
    """Lazy, restartable view of the segments of a text.

    Every iteration rescans the text, so the sequence can be walked any
    number of times.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[Segment]:
        text = self.text
        cursor = 0
        matched = False
        for match in DIRECTIVE_PATTERN.finditer(text):
            matched = True
            if match.start() > cursor:
                yield TextSegment(text[cursor:match.start()])
            yield IllustrationSegment(prompt=match.group(1).strip(), raw=match.group(0))
            cursor = match.end()

        if not matched:
            yield TextSegment(text)
        elif cursor < len(text):
            yield TextSegment(text[cursor:])

    def __repr__(self) -> str:
        return f"SegmentSequence({self.text[:40]!r})"


def split_segments(text: str) -> SegmentSequence:
    """Split Markdown into text and illustration segments, in order.

    Adjacent directives produce consecutive illustrations with no empty text
    between them. Text without directives comes back as a single segment.
    Malformed directives are left in the text untouched.
    """
    return SegmentSequence(text)


def visible_segments(segments: Iterable[Segment]) -> Iterator[Segment]:
    """Drop whitespace-only text segments."""
    for segment in segments:
        if isinstance(segment, TextSegment) and segment.is_blank:
            continue
        yield segment


def join_segments(segments: Iterable[Segment]) -> str:
    """Inverse of split_segments: text plus the original directive markers."""
    parts = []
    for segment in segments:
        if isinstance(segment, IllustrationSegment):
            parts.append(segment.raw)
        else:
            parts.append(segment.text)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Line classification (display only)
# ---------------------------------------------------------------------------

HEADING = "heading"
SPACER = "spacer"
PARAGRAPH = "paragraph"

# Checked in order; "### " must win over "## " and "# "
_HEADING_MARKERS = (("### ", 3), ("## ", 2), ("# ", 1))


@dataclass(frozen=True)
class MarkdownLine:
    kind: str
    text: str = ""
    level: Optional[int] = None


def classify_line(line: str) -> MarkdownLine:
    for marker, level in _HEADING_MARKERS:
        if line.startswith(marker):
            return MarkdownLine(HEADING, line[len(marker):], level)
    if line.strip() == "":
        return MarkdownLine(SPACER)
    return MarkdownLine(PARAGRAPH, line)


def classify_lines(text: str) -> List[MarkdownLine]:
    """Classify each line of a text segment as heading, spacer or paragraph."""
    return [classify_line(line.rstrip("\r")) for line in text.split("\n")]


@dataclass(frozen=True)
class TextBlock:
    lines: List[MarkdownLine]


@dataclass(frozen=True)
class IllustrationBlock:
    prompt: str


def render_blocks(text: str) -> Iterator[Union[TextBlock, IllustrationBlock]]:
    """Display blocks for an article body, skipping blank text."""
    for segment in visible_segments(split_segments(text)):
        if isinstance(segment, IllustrationSegment):
            yield IllustrationBlock(segment.prompt)
        else:
            yield TextBlock(classify_lines(segment.text))
