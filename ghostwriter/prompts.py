"""
Prompt templates for article generation.

The system instruction carries the house style; the user prompt carries the
per-request configuration. The style lists are shared with
ghostwriter.style_check so the local checker looks for exactly what the
model was told to avoid.
"""

from google.genai import types

from ghostwriter.models import GenerationConfig


# KILL PHRASES - Never use these
BANNED_PHRASES = [
    "unlock",
    "delve",
    "tapestry",
    "digital landscape",
    "game-changer",
    "comprehensive guide",
    "bustling",
    "vibrant",
    "in today's world",
]

# Robotic transitions
FORMULAIC_TRANSITIONS = [
    "Firstly",
    "Moreover",
    "In conclusion",
]

ALLOWED_HEADING_LEVELS = (2, 3)


def _quoted(items) -> str:
    return ", ".join(f'"{item}"' for item in items)


SYSTEM_INSTRUCTION = f"""
You are an expert ghostwriter known for "human-like", editorial-quality prose.

CRITICAL RULES:
1. VARY SENTENCE LENGTH: Mix short, punchy sentences with longer, rhythmic ones.
2. AVOID CLICHES: Strictly forbidden words/phrases: {_quoted(BANNED_PHRASES)}.
3. VOICE: Write with authority but empathy. Avoid robotic transitions like {_quoted(FORMULAIC_TRANSITIONS)}. Use natural segues.
4. FORMATTING: Use Markdown. Use H2 (##) and H3 (###) for structure. Do not use H1.
5. IMAGERY: Naturally insert image placeholders where a visual would enhance the story.
   Use EXACTLY this format: ![PROMPT: specific visual description](placeholder)
   Do not wrap this in code blocks. Make the prompt descriptive for an AI image generator.
""".strip()


RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "title": types.Schema(
            type=types.Type.STRING,
            description="The catchy title of the blog post.",
        ),
        "content": types.Schema(
            type=types.Type.STRING,
            description="The full blog post content in Markdown format.",
        ),
    },
    required=["title", "content"],
)


def render_article_prompt(article: GenerationConfig) -> str:
    """Per-request instruction built from the user's configuration."""
    return f"""
Write a high-quality blog post about "{article.topic}".
Target Audience: {article.audience}
Tone: {article.tone}
Keywords to include: {article.keywords}
Target Word Count: approx {article.target_word_count} words.
""".strip()
