#!/usr/bin/env python3
"""
Generate one blog post from the command line.

Prints the article as Markdown. Illustration directives are shown as
suggested-illustration cards unless --raw is given.

Usage:
    python run_generate.py "The Future of Sustainable Coffee"
    python run_generate.py "Edge caching" --audience "Backend engineers" --words 1200
    python run_generate.py "Sourdough at home" --raw > post.md
"""

import argparse
import sys
import textwrap
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from dotenv import load_dotenv
load_dotenv()

from ghostwriter.config import config
from ghostwriter.credentials import PromptKeySelector
from ghostwriter.export import article_meta, featured_image_prompt, format_for_clipboard
from ghostwriter.generation_client import GenerationClient
from ghostwriter.markdown_content import HEADING, PARAGRAPH, IllustrationBlock, render_blocks
from ghostwriter.models import Failed, GenerationConfig, Success
from ghostwriter.session import GenerationSession, ThreadingTimer
from ghostwriter.style_check import check_style, format_style_report
from ghostwriter.utils.logging import configure_logging


def word_count_arg(value: str) -> int:
    count = int(value)
    if count <= 0:
        raise argparse.ArgumentTypeError("word count must be positive")
    return count


def render_article(document, article: GenerationConfig) -> str:
    """Plain-text rendering with illustration cards."""
    out = [
        f"Featured Image Concept: \"{featured_image_prompt(document, article.topic)}\"",
        "",
        document.title,
        "=" * len(document.title),
        article_meta(article),
        "",
    ]
    for block in render_blocks(document.content):
        if isinstance(block, IllustrationBlock):
            out.append("+-- Suggested Illustration " + "-" * 40)
            for line in textwrap.wrap(block.prompt, 64) or [""]:
                out.append(f"| {line}")
            out.append("+" + "-" * 66)
            continue
        for line in block.lines:
            if line.kind == HEADING:
                out.append("")
                out.append(line.text.upper() if line.level == 1 else line.text)
                out.append(("=" if line.level == 1 else "-") * len(line.text))
            elif line.kind == PARAGRAPH:
                out.append(line.text)
            else:
                out.append("")
    return "\n".join(out)


def check_config(stream=None) -> bool:
    """Print configuration issues and warnings; False if generation cannot run."""
    stream = stream or sys.stderr
    status = config.validate()
    for issue in status["issues"]:
        print(f"Configuration issue: {issue}", file=stream)
    for warning in status["warnings"]:
        print(f"Configuration warning: {warning}", file=stream)
    return status["valid"]


def main():
    parser = argparse.ArgumentParser(
        description=f'{config.APP_NAME}: generate an editorial-quality blog post with Gemini'
    )
    parser.add_argument('topic', help='Topic / title idea')
    parser.add_argument('--audience', default=config.form.DEFAULT_AUDIENCE,
                        help='Target audience')
    parser.add_argument('--tone', default=config.form.DEFAULT_TONE,
                        help='Tone of voice')
    parser.add_argument('--keywords', default='',
                        help='Key themes / keywords, comma separated')
    parser.add_argument('--words', type=word_count_arg,
                        default=config.form.DEFAULT_WORD_COUNT,
                        help='Target word count')
    parser.add_argument('--raw', action='store_true',
                        help='Print the article as copyable Markdown')
    parser.add_argument('--style-check', action='store_true',
                        help='Report style rule violations after the article')

    args = parser.parse_args()

    configure_logging(str(config.paths.LOGS_DIR), config.LOG_LEVEL)
    if not check_config():
        sys.exit(2)

    article = GenerationConfig(
        topic=args.topic,
        audience=args.audience,
        tone=args.tone,
        keywords=args.keywords,
        target_word_count=args.words,
    )

    client = GenerationClient(key_selector=PromptKeySelector())
    session = GenerationSession(ThreadingTimer())

    print(f"Outlining structure for \"{article.topic}\"...", file=sys.stderr)
    outcome = session.run(client, article)

    if isinstance(outcome, Failed):
        print(f"\nSomething went wrong: {outcome.message}", file=sys.stderr)
        sys.exit(1)

    if not isinstance(outcome, Success):
        print("\nGeneration did not complete.", file=sys.stderr)
        sys.exit(1)

    document = outcome.document
    if args.raw:
        print(format_for_clipboard(document))
    else:
        print(render_article(document, article))

    if args.style_check:
        print("\n" + format_style_report(check_style(document.content)), file=sys.stderr)


if __name__ == "__main__":
    main()
