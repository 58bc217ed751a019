"""
GhostWriter AI - Editorial-grade content generator

Configure topic, audience, tone and length in the sidebar; the article comes
back as Markdown with suggested illustrations inline.

Run with: streamlit run app.py
"""

import streamlit as st
import sys
import html
import json
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

# Load environment variables
from dotenv import load_dotenv
load_dotenv()

# Centralized configuration
from ghostwriter.config import config
from ghostwriter.credentials import EnvKeySelector, current_api_key, save_api_key
from ghostwriter.export import article_meta, featured_image_prompt, format_for_clipboard
from ghostwriter.generation_client import GenerationClient
from ghostwriter.markdown_content import HEADING, PARAGRAPH, IllustrationBlock, render_blocks
from ghostwriter.models import GenerationConfig, GenerationStatus
from ghostwriter.session import GenerationSession, ThreadingTimer
from ghostwriter.style_check import check_style, format_style_report
from ghostwriter.utils.logging import configure_logging, get_logger

configure_logging(str(config.paths.LOGS_DIR), config.LOG_LEVEL)
logger = get_logger(__name__)

_startup_status = config.validate()
if not _startup_status["valid"] or _startup_status["warnings"]:
    logger.warning("config_validation", issues=_startup_status["issues"],
                   warnings=_startup_status["warnings"],
                   environment=_startup_status["environment"])

# Page config
st.set_page_config(
    page_title=config.APP_NAME,
    page_icon=None,
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&family=Merriweather:wght@400;700&display=swap');

    :root {
        --color-primary: #6366f1;
        --color-primary-light: #eef2ff;
        --color-text-primary: #0f172a;
        --color-text-secondary: #475569;
        --color-text-muted: #94a3b8;
        --color-border: #e2e8f0;
        --radius-md: 8px;
        --radius-lg: 12px;
    }

    .stApp {
        font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
    }
    .main-header {
        font-size: 1.5rem;
        font-weight: 700;
        letter-spacing: -0.02em;
        margin-bottom: 0;
    }
    .sub-header {
        font-size: 0.75rem;
        color: var(--color-text-muted);
    }
    .article {
        font-family: 'Merriweather', Georgia, serif;
        line-height: 1.75;
        max-width: 56rem;
    }
    .article h1 { font-size: 1.875rem; font-weight: 700; margin: 2rem 0 1rem; }
    .article h2 { font-size: 1.5rem; font-weight: 700; margin: 2rem 0 1rem; }
    .article h3 { font-size: 1.25rem; font-weight: 700; margin: 1.5rem 0 0.75rem; }
    .article p { margin-bottom: 1rem; }
    .article .spacer { height: 1rem; }
    .article-title {
        font-family: 'Merriweather', Georgia, serif;
        font-size: 2.5rem;
        font-weight: 700;
        line-height: 1.2;
    }
    .article-meta {
        font-size: 0.875rem;
        color: var(--color-text-muted);
        padding-bottom: 2rem;
        margin-bottom: 2rem;
        border-bottom: 1px solid var(--color-border);
    }
    .featured-concept {
        margin-bottom: 2.5rem;
        padding: 1.5rem;
        border: 1px solid var(--color-border);
        border-radius: var(--radius-lg);
    }
    .card-label {
        font-size: 0.75rem;
        font-weight: 700;
        text-transform: uppercase;
        letter-spacing: 0.1em;
        color: var(--color-text-muted);
        margin-bottom: 0.75rem;
    }
    .featured-concept .concept { font-style: italic; font-weight: 500; }
    .illustration-card {
        margin: 2rem 0;
        padding: 1.5rem;
        border: 1px solid #e0e7ff;
        border-radius: var(--radius-md);
        background: rgba(238, 242, 255, 0.3);
    }
    .illustration-card .card-label { color: #4338ca; }
    .illustration-prompt {
        padding: 1rem;
        border: 1px solid #e0e7ff;
        border-radius: 4px;
        font-size: 0.875rem;
        line-height: 1.6;
    }
    .empty-state, .progress-state, .error-state {
        text-align: center;
        padding: 6rem 2rem;
    }
    .empty-state-title { font-family: 'Merriweather', Georgia, serif; font-size: 1.5rem; }
    .empty-state-text { color: var(--color-text-secondary); max-width: 28rem; margin: 0.5rem auto; }
</style>
""", unsafe_allow_html=True)


PRIVACY_POLICY = """
*Last Updated: October 2023*

Welcome to GhostWriter AI. We are committed to protecting your personal information and your right to privacy.
This Privacy Policy explains what information we collect, how we use it, and what rights you have in relation to it.

### 1. Information We Collect

GhostWriter AI does not maintain a backend server to store your personal data, blog drafts, or history.

- **Input Data:** Text prompts, topics, and configuration settings you enter are processed transiently to generate content.
- **API Keys:** If you provide an API Key, it is stored locally in your environment and is used solely to authenticate requests with Google's services.

### 2. How We Process Data

To provide AI generation features, this application interacts with third-party AI services:

- **Google Gemini API:** When you click "Generate", your input data (topic, tone, keywords) is sent to Google's servers for processing.

Please refer to [Google's Privacy Policy](https://policies.google.com/privacy) to understand how they handle data sent to their API.

### 3. Data Retention

We do not retain your generated content. Once you close or refresh the page, your current session data is lost unless you have manually saved it elsewhere. We do not track your usage history.

### 4. Permissions

The app may request access to features like the clipboard (to copy text). These permissions are used strictly for local functionality.

### 5. Changes to This Policy

We may update this privacy policy from time to time. The updated version will be indicated by an updated "Revised" date and the updated version will be effective as soon as it is accessible.

### 6. Contact Us

If you have questions or comments about this policy, you may contact us at support@ghostwriter.ai.

---

GhostWriter AI is an independent application and is not affiliated with Google.
"""


def safe_html(text: str) -> str:
    """Escape HTML entities in dynamic text before injection into unsafe_allow_html."""
    return html.escape(str(text)) if text else ""


def init_session_state():
    """Initialize session state variables."""
    defaults = {
        'view': 'generator',  # 'generator' or 'privacy'
        'article': None,      # GenerationConfig of the last request
        'generation': None,   # GenerationSession
    }
    for key, val in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = val
    if st.session_state.generation is None:
        st.session_state.generation = GenerationSession(ThreadingTimer())


def copy_to_clipboard(text: str, button_text: str = "Copy", key: str = "copy_btn"):
    """
    Create a one-click copy button with toast notification.
    Uses JavaScript clipboard API for instant copy.
    """
    import streamlit.components.v1 as components

    # Proper JS string escaping via json.dumps (handles all special chars)
    safe_js_text = json.dumps(text)
    feedback_ms = int(config.ui.COPY_FEEDBACK_SECONDS * 1000)

    components.html(f'''
        <style>
            .copy-btn {{
                background: #ffffff;
                color: #475569;
                border: 1px solid #e2e8f0;
                padding: 0.5rem 0.75rem;
                border-radius: 6px;
                font-size: 0.875rem;
                font-weight: 500;
                cursor: pointer;
                width: 100%;
                font-family: 'Inter', -apple-system, sans-serif;
            }}
            .copy-btn:hover {{ color: #4f46e5; background: #f8fafc; }}
            .copy-btn.copied {{ background: #f0fdf4; border-color: #bbf7d0; color: #15803d; }}
        </style>
        <button class="copy-btn" title="Copy markdown to clipboard" onclick="copyToClipboard(this)">{safe_html(button_text)}</button>
        <script>
            function copyToClipboard(btn) {{
                const text = {safe_js_text};
                navigator.clipboard.writeText(text).then(() => {{
                    btn.innerHTML = 'Copied';
                    btn.classList.add('copied');
                    setTimeout(() => {{
                        btn.innerHTML = {json.dumps(button_text)};
                        btn.classList.remove('copied');
                    }}, {feedback_ms});
                }}).catch(err => {{
                    console.error('Failed to copy text: ', err);
                }});
            }}
        </script>
    ''', height=50)


def render_article_body(content: str):
    """Text blocks as styled HTML, illustration directives as cards."""
    for block in render_blocks(content):
        if isinstance(block, IllustrationBlock):
            st.markdown(f'''
            <div class="illustration-card">
                <div class="card-label">Suggested Illustration</div>
                <div class="illustration-prompt">{safe_html(block.prompt)}</div>
            </div>
            ''', unsafe_allow_html=True)
            continue

        parts = []
        for line in block.lines:
            if line.kind == HEADING:
                parts.append(f"<h{line.level}>{safe_html(line.text)}</h{line.level}>")
            elif line.kind == PARAGRAPH:
                parts.append(f"<p>{safe_html(line.text)}</p>")
            else:
                parts.append('<div class="spacer"></div>')
        st.markdown(f'<div class="article">{"".join(parts)}</div>', unsafe_allow_html=True)


def render_empty_state():
    st.markdown('''
    <div class="empty-state">
        <p class="empty-state-title">Ready to Write</p>
        <p class="empty-state-text">Configure your topic, audience, and tone in the sidebar to generate a human-like, editorial-quality blog post.</p>
    </div>
    ''', unsafe_allow_html=True)


def render_progress(placeholder, status: GenerationStatus):
    heading = "Drafting content..." if status is GenerationStatus.WRITING else "Outlining structure..."
    placeholder.markdown(f'''
    <div class="progress-state">
        <h3>{heading}</h3>
        <p class="empty-state-text">Crafting your unique voice</p>
    </div>
    ''', unsafe_allow_html=True)


def render_error(session: GenerationSession):
    st.markdown(f'''
    <div class="error-state">
        <h3>Something went wrong</h3>
        <p class="empty-state-text">{safe_html(session.error_message)}</p>
    </div>
    ''', unsafe_allow_html=True)
    _, center, _ = st.columns([2, 1, 2])
    with center:
        if st.button("Try Again", use_container_width=True, key="try_again"):
            session.reset()
            st.rerun()


def render_success(session: GenerationSession, article: GenerationConfig):
    document = session.document

    st.markdown(f'''
    <div class="featured-concept">
        <div class="card-label">Featured Image Concept</div>
        <div class="concept">"{safe_html(featured_image_prompt(document, article.topic))}"</div>
    </div>
    ''', unsafe_allow_html=True)

    title_col, copy_col = st.columns([6, 1])
    with title_col:
        st.markdown(f'<div class="article-title">{safe_html(document.title)}</div>',
                    unsafe_allow_html=True)
    with copy_col:
        copy_to_clipboard(format_for_clipboard(document), key="copy_article")

    st.markdown(f'<div class="article-meta">{safe_html(article_meta(article))}</div>',
                unsafe_allow_html=True)

    render_article_body(document.content)

    report = check_style(document.content)
    with st.expander("Style check" if report.passed else f"Style check ({report.violation_count} issues)"):
        st.text(format_style_report(report))


def run_generation(article: GenerationConfig):
    """Run the request off the script thread and show the phase while waiting."""
    session = st.session_state.generation
    client = GenerationClient(key_selector=EnvKeySelector())
    st.session_state.article = article

    placeholder = st.empty()
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(session.run, client, article)
        while not future.done():
            render_progress(placeholder, session.status)
            time.sleep(config.ui.POLL_INTERVAL_SECONDS)
        future.result()
    placeholder.empty()


def render_sidebar(session: GenerationSession):
    form = config.form
    is_generating = session.status.is_generating
    on_privacy = st.session_state.view == 'privacy'
    disabled = is_generating or on_privacy

    with st.sidebar:
        st.markdown(f'<p class="main-header">{safe_html(config.APP_NAME)}</p>', unsafe_allow_html=True)
        st.markdown('<p class="sub-header">Editorial-grade content generator</p>', unsafe_allow_html=True)
        st.divider()

        topic = st.text_input("Topic / Title Idea", placeholder="e.g. The Future of Sustainable Coffee",
                              disabled=disabled, key="topic")
        audience = st.text_input("Target Audience", value=form.DEFAULT_AUDIENCE,
                                 placeholder="e.g. Eco-conscious millenials",
                                 disabled=disabled, key="audience")
        tone = st.text_input("Tone of Voice", value=form.DEFAULT_TONE,
                             placeholder="e.g. Witty, Investigative, Professional",
                             disabled=disabled, key="tone")
        keywords = st.text_area("Key Themes / Keywords",
                                placeholder="fair trade, climate change, brewing methods...",
                                height=80, disabled=disabled, key="keywords")
        word_count = st.slider("Length", min_value=form.WORD_COUNT_MIN, max_value=form.WORD_COUNT_MAX,
                               value=form.DEFAULT_WORD_COUNT, step=form.WORD_COUNT_STEP,
                               format="~%d words", disabled=disabled, key="word_count")

        st.divider()

        if on_privacy:
            if st.button("Go to Generator", type="primary", use_container_width=True):
                st.session_state.view = 'generator'
                st.rerun()
        elif st.button("Generate Blog Post", type="primary", use_container_width=True,
                       disabled=is_generating or not topic.strip()):
            article = GenerationConfig(
                topic=topic.strip(),
                audience=audience,
                tone=tone,
                keywords=keywords,
                target_word_count=word_count,
            )
            st.session_state.view = 'generator'
            st.session_state.start_generation = article

        if st.button("Privacy Policy", use_container_width=True, key="privacy_link"):
            st.session_state.view = 'privacy'
            st.rerun()

        with st.expander("Settings", expanded=False):
            st.caption(f"Gemini: {'OK' if current_api_key() else 'Missing'}")
            st.caption(f"Model: {config.models.GENERATION_MODEL}")
            status = config.validate()
            for issue in status["issues"]:
                st.error(issue)
            for warning in status["warnings"]:
                st.warning(warning)
            key_input = st.text_input("Gemini API Key", type="password",
                                      placeholder="AIza...", key="api_key_input")
            if key_input and st.button("Save Key", key="save_api_key", use_container_width=True):
                save_api_key(key_input)
                st.success("Key saved!")
                st.rerun()


def render_privacy():
    if st.button("< Back to Generator", key="privacy_back"):
        st.session_state.view = 'generator'
        st.rerun()
    st.title("Privacy Policy")
    st.markdown(PRIVACY_POLICY)


def main():
    init_session_state()
    session = st.session_state.generation

    render_sidebar(session)

    if st.session_state.view == 'privacy':
        render_privacy()
        return

    article = st.session_state.pop("start_generation", None)
    if article is not None:
        run_generation(article)

    if session.status is GenerationStatus.SUCCESS and session.document is not None:
        render_success(session, st.session_state.article)
    elif session.status is GenerationStatus.ERROR:
        render_error(session)
    else:
        render_empty_state()


if __name__ == "__main__":
    main()
