"""
Tests for the advisory style checker.

Run with: pytest tests/test_style_check.py -v
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ghostwriter.style_check import check_style, format_style_report


CLEAN = """## Why Beans Matter

Short sentence. Then a longer one that wanders a little before it lands.

![PROMPT: a farmer holding ripe cherries](placeholder)

### The Harvest

It happens by hand."""


class TestCleanContent:
    def test_passes(self):
        report = check_style(CLEAN)
        assert report.passed
        assert report.violation_count == 0
        assert report.directive_count == 1

    def test_report_text(self):
        assert format_style_report(check_style(CLEAN)).startswith("[PASSED]")


class TestBannedPhrases:
    """Words the system instruction forbids."""

    def test_detects_banned_word(self):
        report = check_style("Let us delve into the details.")
        assert [v["phrase"] for v in report.banned_phrases] == ["delve"]

    def test_case_insensitive_and_inflected(self):
        report = check_style("Unlocking value in the Digital  Landscape.")
        phrases = {v["phrase"] for v in report.banned_phrases}
        assert phrases == {"unlock", "digital landscape"}

    def test_directive_prompt_ignored(self):
        report = check_style("![PROMPT: a vibrant bustling market](placeholder)")
        assert report.banned_phrases == []

    def test_multiline_directive_prompt_ignored(self):
        content = "Intro.\n![PROMPT: a vibrant\nbustling market at dusk](placeholder)\nOutro."
        report = check_style(content)
        assert report.banned_phrases == []
        assert report.directive_count == 1
        assert report.passed

    def test_line_numbers(self):
        report = check_style("fine\nA true game-changer.")
        assert report.banned_phrases[0]["line_number"] == 2

    def test_line_numbers_after_multiline_directive(self):
        content = "![PROMPT: two\nlines](placeholder)\nLet us delve in."
        report = check_style(content)
        assert [v["line_number"] for v in report.banned_phrases] == [3]


class TestTransitions:
    def test_sentence_initial_transition(self):
        report = check_style("It rained. Moreover, it was cold.")
        assert [v["transition"] for v in report.formulaic_transitions] == ["Moreover"]

    def test_line_initial_transition(self):
        report = check_style("In conclusion, drink coffee.")
        assert report.formulaic_transitions

    def test_mid_sentence_word_not_flagged(self):
        report = check_style("We did it firstly for fun.")
        assert report.formulaic_transitions == []


class TestHeadingsAndFences:
    def test_h1_flagged(self):
        report = check_style("# Big Title\n\n## Fine")
        assert [v["level"] for v in report.heading_violations] == [1]

    def test_h4_flagged(self):
        report = check_style("#### Tiny")
        assert report.heading_violations[0]["level"] == 4

    def test_directive_in_code_fence(self):
        content = "```\n![PROMPT: a diagram](placeholder)\n```"
        report = check_style(content)
        assert len(report.fenced_directives) == 1
        assert not report.passed

    def test_multiline_directive_in_code_fence(self):
        content = "Text\n```\n![PROMPT: a\ndiagram](placeholder)\n```"
        report = check_style(content)
        assert [v["line_number"] for v in report.fenced_directives] == [3]

    def test_heading_inside_fence_ignored(self):
        report = check_style("```bash\n# a shell comment\n```")
        assert report.heading_violations == []

    def test_failure_report_lists_issues(self):
        text = format_style_report(check_style("# Title\nLet us delve in."))
        assert "[WARNING] 2 style issue(s) found" in text
        assert "H1 heading" in text

    def test_to_dict(self):
        result = check_style("# Title").to_dict()
        assert result["passed"] is False
        assert len(result["heading_violations"]) == 1
