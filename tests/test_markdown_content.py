"""
Tests for directive splitting and line classification.

Run with: pytest tests/test_markdown_content.py -v
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ghostwriter.markdown_content import (
    HEADING,
    PARAGRAPH,
    SPACER,
    IllustrationBlock,
    IllustrationSegment,
    TextBlock,
    TextSegment,
    classify_lines,
    join_segments,
    render_blocks,
    split_segments,
    visible_segments,
)


ARTICLE = """## The Morning Ritual

Coffee is older than most cities.
![PROMPT: a steaming cup on a wooden table at dawn](placeholder)

### Where It Grows

High and cool, mostly.
![PROMPT: terraced hills in Ethiopia](placeholder)![PROMPT:  close-up of red coffee cherries ](placeholder)
That is the end."""


class TestSplitSegments:
    """Splitting text into text and illustration segments."""

    def test_text_between_directive(self):
        segments = list(split_segments("A ![PROMPT: a cat](placeholder) B"))
        assert segments == [
            TextSegment("A "),
            IllustrationSegment("a cat"),
            TextSegment(" B"),
        ]

    def test_no_directives_single_segment(self):
        text = "## Heading\n\nJust prose, no pictures."
        assert list(split_segments(text)) == [TextSegment(text)]

    def test_empty_input_single_segment(self):
        assert list(split_segments("")) == [TextSegment("")]

    def test_adjacent_directives_no_text_between(self):
        text = "![PROMPT: one](placeholder)![PROMPT: two](placeholder)"
        assert list(split_segments(text)) == [
            IllustrationSegment("one"),
            IllustrationSegment("two"),
        ]

    def test_prompt_is_trimmed(self):
        segments = list(split_segments("![PROMPT:    wide shot   ](placeholder)"))
        assert segments == [IllustrationSegment("wide shot")]

    def test_raw_marker_preserved(self):
        raw = "![PROMPT:    wide shot   ](placeholder)"
        segment = list(split_segments(raw))[0]
        assert segment.raw == raw

    def test_directive_mid_line_is_matched(self):
        segments = list(split_segments("before![PROMPT: x](placeholder)after"))
        assert [type(s) for s in segments] == [TextSegment, IllustrationSegment, TextSegment]

    def test_unclosed_directive_is_plain_text(self):
        text = "Look: ![PROMPT: never closed(placeholder) and more"
        assert list(split_segments(text)) == [TextSegment(text)]

    def test_wrong_target_is_plain_text(self):
        text = "![PROMPT: a dog](https://example.com/dog.png)"
        assert list(split_segments(text)) == [TextSegment(text)]

    def test_ordinary_image_is_plain_text(self):
        text = "![a dog](placeholder)"
        assert list(split_segments(text)) == [TextSegment(text)]

    def test_sequence_is_restartable(self):
        segments = split_segments(ARTICLE)
        assert list(segments) == list(segments)

    def test_article_segment_order(self):
        segments = list(split_segments(ARTICLE))
        prompts = [s.prompt for s in segments if isinstance(s, IllustrationSegment)]
        assert prompts == [
            "a steaming cup on a wooden table at dawn",
            "terraced hills in Ethiopia",
            "close-up of red coffee cherries",
        ]
        assert isinstance(segments[0], TextSegment)
        assert segments[0].text.startswith("## The Morning Ritual")
        assert segments[-1] == TextSegment("\nThat is the end.")


class TestRoundTrip:
    """Joining segments reproduces the input exactly."""

    @pytest.mark.parametrize("text", [
        "",
        "   \n\t ",
        "plain",
        "A ![PROMPT: a cat](placeholder) B",
        "![PROMPT: a](placeholder)",
        "![PROMPT:a](placeholder)  \n  ![PROMPT:  b ](placeholder)",
        "unclosed ![PROMPT: x(placeholder)",
        ARTICLE,
    ])
    def test_join_restores_input(self, text):
        assert join_segments(split_segments(text)) == text

    def test_text_segments_without_markers(self):
        text = "A ![PROMPT: a cat](placeholder) B"
        texts = [s.text for s in split_segments(text) if isinstance(s, TextSegment)]
        assert "".join(texts) == "A  B"


class TestVisibleSegments:
    """Whitespace-only text does not render."""

    def test_whitespace_only_input_has_no_visible_segment(self):
        assert list(visible_segments(split_segments("  \n\n\t  "))) == []

    def test_blank_text_between_directives_dropped(self):
        text = "![PROMPT: a](placeholder)\n\n![PROMPT: b](placeholder)"
        visible = list(visible_segments(split_segments(text)))
        assert visible == [IllustrationSegment("a"), IllustrationSegment("b")]

    def test_is_blank(self):
        assert TextSegment(" \n ").is_blank
        assert not TextSegment(" x ").is_blank


class TestClassifyLines:
    """Heading, spacer and paragraph classification."""

    def test_heading_levels(self):
        lines = classify_lines("# One\n## Two\n### Three")
        assert [(l.kind, l.level, l.text) for l in lines] == [
            (HEADING, 1, "One"),
            (HEADING, 2, "Two"),
            (HEADING, 3, "Three"),
        ]

    def test_level_three_wins_over_shorter_markers(self):
        line = classify_lines("### Deep")[0]
        assert line.level == 3
        assert line.text == "Deep"

    def test_marker_without_space_is_paragraph(self):
        line = classify_lines("#hashtag")[0]
        assert line.kind == PARAGRAPH
        assert line.text == "#hashtag"

    def test_four_hashes_is_paragraph(self):
        assert classify_lines("#### Too deep")[0].kind == PARAGRAPH

    def test_blank_lines_are_spacers(self):
        lines = classify_lines("a\n\n   \nb")
        assert [l.kind for l in lines] == [PARAGRAPH, SPACER, SPACER, PARAGRAPH]

    def test_indented_heading_is_paragraph(self):
        assert classify_lines("  ## not a heading")[0].kind == PARAGRAPH

    def test_crlf_line_endings(self):
        lines = classify_lines("## Title\r\nBody\r\n")
        assert lines[0].text == "Title"
        assert lines[1].text == "Body"

    def test_classification_does_not_change_segments(self):
        before = list(split_segments(ARTICLE))
        for segment in before:
            if isinstance(segment, TextSegment):
                classify_lines(segment.text)
        assert list(split_segments(ARTICLE)) == before


class TestRenderBlocks:
    """Display blocks combine splitting and classification."""

    def test_blocks_alternate(self):
        blocks = list(render_blocks("Intro\n![PROMPT: a fox](placeholder)\nOutro"))
        assert isinstance(blocks[0], TextBlock)
        assert blocks[1] == IllustrationBlock("a fox")
        assert isinstance(blocks[2], TextBlock)

    def test_blank_text_produces_no_block(self):
        assert list(render_blocks(" \n ")) == []
