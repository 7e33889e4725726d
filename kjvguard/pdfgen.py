"""
Weekly printables: an HTML page and a PDF built with ReportLab.

Every reference is quoted through the supplied `quote` callable, so the
printed Scripture is exactly the corpus text. A quote is either a verse
string or a {verse: text} mapping for a whole chapter.
"""

from __future__ import annotations

import html
import re
from io import BytesIO
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer

from .config import TRANSLATION
from .util import info

QuoteText = Union[str, Dict[int, str]]
QuoteFn = Callable[[str], QuoteText]

DEFAULT_TITLE = "Weekly Session"
DEFAULT_THEME = "Family"

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9_.-]+")

DEVOTION_OUTLINE = (
    "Read the memory verse aloud together (twice).",
    "Ask: What does this verse say about God? About us?",
    "Short prayer: Thank God for this truth.",
)

JOURNAL_PROMPTS = (
    "What is one way you saw God’s goodness this week?",
    "Where do you need Jesus’ help right now?",
    "Who can you encourage with this verse?",
)

REFLECTION_PROMPTS = (
    "What did this verse teach me about God?",
    "How can I apply this verse today?",
    "Who can I share this with?",
)

ACTIVITIES = (
    "Copy the memory verse neatly twice.",
    "Draw a picture that matches the verse meaning.",
    "Act it out as a mini skit.",
    "Memorize first half today; second half tomorrow.",
)

CHECKLIST = (
    "Read the memory verse daily",
    "Pray together (morning or bedtime)",
    "Journal one sentence per day",
    "Kindness mission: help a sibling/neighbor",
    "Family share time (5 minutes)",
)

FOOTER = f"Christ is King • Scripture quoted exactly ({TRANSLATION}). No paraphrasing."

BASE_CSS = """
  *{box-sizing:border-box} body{font-family:Georgia,serif;margin:0;color:#111}
  header{padding:18px 22px;border-bottom:2px solid #222}
  h1,h2,h3{margin:8px 0}
  .wrap{padding:18px 22px}
  .verse{background:#f6f7fb;border:1px solid #ddd;padding:12px;border-radius:10px;margin:8px 0;font-size:18px}
  .grid{display:grid;grid-template-columns:1fr 1fr;gap:18px}
  .card{border:1px solid #ddd;border-radius:12px;padding:14px}
  .check li{margin:6px 0}
  .doodle{border:2px dashed #999;border-radius:18px;min-height:420px}
  footer{padding:14px 22px;border-top:1px solid #ddd;color:#666;font-size:12px}
  .page-break{page-break-before:always}
"""


def quote_text(text: QuoteText) -> str:
    """
    Flatten a quote to one line. Chapters become "1. text 2. text ...".
    """
    if isinstance(text, str):
        return text
    return " ".join(f"{n}. {t}" for n, t in text.items())


def collect_verses(refs: Sequence[str], quote: QuoteFn) -> List[Tuple[str, str]]:
    """Quote every reference; resolution errors propagate to the caller."""
    return [(ref, quote_text(quote(ref))) for ref in refs]


def _items(tag: str, values: Sequence[str], prefix: str = "") -> str:
    inner = "".join(f"<li>{prefix}{html.escape(v)}</li>" for v in values)
    return f"<{tag}>{inner}</{tag}>"


def render_week_html(
    week: Union[int, str],
    theme: str,
    refs: Sequence[str],
    title: str,
    quote: QuoteFn,
) -> str:
    """
    Render the weekly printable as a standalone HTML document.

    Parameters
    ----------
    week:
        Week number or label shown in the header.
    theme:
        Theme line shown under the title.
    refs:
        Scripture references, quoted in the given order.
    title:
        Session title.
    quote:
        Callable returning the exact text for a reference.
    """
    e = html.escape
    verses = collect_verses(refs, quote)
    verse_blocks = "".join(
        f'<div class="verse"><strong>{e(ref)}</strong><br/>{e(text)}</div>'
        for ref, text in verses
    )
    return f"""<!doctype html><html><head><meta charset="utf-8"/>
<title>Week {e(str(week))} • {e(title)}</title>
<style>{BASE_CSS}</style>
</head>
<body>
<header>
<h1>{e(title)}</h1>
<div>Week {e(str(week))} • Theme: {e(theme)}</div>
</header>
<div class="wrap">
<h2>Memory Verse</h2>
{verse_blocks}
<div class="grid">
<div class="card"><h3>Devotion Outline</h3>{_items("ol", DEVOTION_OUTLINE)}</div>
<div class="card"><h3>Journal Prompts</h3>{_items("ol", JOURNAL_PROMPTS)}</div>
</div>
<div class="grid" style="margin-top:18px">
<div class="card"><h3>Activities</h3>{_items("ul", ACTIVITIES)}</div>
<div class="card"><h3>Weekly Checklist</h3>{_items("ul", CHECKLIST, '<input type="checkbox"/> ').replace("<ul>", '<ul class="check">', 1)}</div>
</div>
<section>
<h3>Reflection Prompts</h3>
{_items("ol", REFLECTION_PROMPTS)}
</section>
</div>
<div class="page-break"></div>
<div class="wrap">
<h2>Color / Doodle Page</h2>
<p>Draw what this verse looks like in your life.</p>
<div class="doodle"></div>
</div>
<footer>{e(FOOTER)}</footer>
</body></html>
"""


def _markup_escape(text: str) -> str:
    return html.escape(text, quote=False)


def build_week_pdf(
    week: Union[int, str],
    theme: str,
    refs: Sequence[str],
    title: str,
    quote: QuoteFn,
) -> bytes:
    """
    Build the weekly printable as PDF bytes (Letter size).

    Paragraph text goes through ReportLab's mini-markup, so every
    user-supplied or quoted string is escaped first.
    """
    e = _markup_escape
    verses = collect_verses(refs, quote)

    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph(e(title), styles["Heading1"]))
    story.append(Paragraph(f"Week {e(str(week))} • Theme: {e(theme)}", styles["Normal"]))
    story.append(Spacer(1, 12))

    story.append(Paragraph("Memory Verse", styles["Heading2"]))
    for ref, text in verses:
        story.append(Paragraph(f"<b>{e(ref)}</b> ({TRANSLATION})", styles["Normal"]))
        story.append(Paragraph(e(text), styles["Normal"]))
        story.append(Spacer(1, 6))

    sections = (
        ("Devotion Outline", DEVOTION_OUTLINE),
        ("Journal Prompts", JOURNAL_PROMPTS),
        ("Activities", ACTIVITIES),
        ("Weekly Checklist", CHECKLIST),
        ("Reflection Prompts", REFLECTION_PROMPTS),
    )
    for heading, lines in sections:
        story.append(Paragraph(heading, styles["Heading3"]))
        for i, line in enumerate(lines, start=1):
            marker = "[ ]" if heading == "Weekly Checklist" else f"{i}."
            story.append(Paragraph(f"{marker} {e(line)}", styles["Normal"]))
            story.append(Spacer(1, 2))
        story.append(Spacer(1, 8))

    story.append(PageBreak())
    story.append(Paragraph("Color / Doodle Page", styles["Heading2"]))
    story.append(Paragraph("Draw what this verse looks like in your life.", styles["Normal"]))
    story.append(Spacer(1, 360))
    story.append(Paragraph(e(FOOTER), styles["Italic"]))

    buf = BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=LETTER, title=f"Week {week} - {title}")
    doc.build(story)
    return buf.getvalue()


def write_week_pdf(
    output_path: Path,
    week: Union[int, str],
    theme: str,
    refs: Sequence[str],
    title: str,
    quote: QuoteFn,
) -> Path:
    output_path = output_path.with_suffix(".pdf")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = build_week_pdf(week, theme, refs, title, quote)
    output_path.write_bytes(data)
    info(f"PDF exported: {output_path}")
    return output_path


def pdf_filename(week: Optional[Union[int, str]]) -> str:
    """
    Download name for the week PDF, e.g. 'week-3.pdf' or 'week-study.pdf'.

    Only [A-Za-z0-9_.-] survive, so the name is always a safe header value.
    """
    label = _UNSAFE_FILENAME_RE.sub("-", "" if week is None else str(week)).strip("-.")
    return f"week-{label or 'study'}.pdf"
