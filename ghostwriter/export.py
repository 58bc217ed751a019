"""Text exports of a generated article: clipboard copy and display metadata."""

from ghostwriter.models import GeneratedDocument, GenerationConfig


def format_for_clipboard(document: GeneratedDocument) -> str:
    """The article as a single Markdown string, title as H1."""
    return f"# {document.title}\n\n{document.content}"


def featured_image_prompt(document: GeneratedDocument, topic: str) -> str:
    """Concept prompt for the featured image shown above the article."""
    return (
        f'A high-quality, editorial style featured image for a blog post titled '
        f'"{document.title}" about {topic}. '
        f'Minimalist, artistic, professional photography.'
    )


def article_meta(article: GenerationConfig) -> str:
    return f"~{article.target_word_count} words • Target: {article.audience}"
