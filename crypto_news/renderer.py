"""
Detail page rendering for HTML, Markdown and JSON output.

HTML goes through the Jinja2 detail template with autoescaping; the
article's content block is already escaped markup and is inserted as-is.
"""

from __future__ import annotations

import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .content import TEMPLATE_DIR
from .page import DetailView

FORMATS = ("html", "markdown", "json")

_SECTION_LABELS = {
    "news": "News",
    "opinion": "Opinion",
    "follow-up": "Follow-up",
    "markets": "Markets",
    "predictions": "Predictions",
}


def render_html(view: DetailView) -> str:
    """Render a detail page as a standalone HTML document."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    template = env.get_template("detail.html")
    article = view.article
    return template.render(
        article=article,
        section_label=_SECTION_LABELS.get(article.section, article.section.title()),
        related=view.related,
        error=view.error,
        prediction=article.prediction,
    )


def render_markdown(view: DetailView) -> str:
    """Render a detail page as Markdown.

    The content block stays HTML, which Markdown renderers pass through.
    """
    art = view.article
    lines = []
    if view.error:
        lines.extend([f"> **Notice:** {view.error}", ""])
    lines.extend([f"# {art.title}", ""])
    lines.append(f"- Category: {art.category}")
    lines.append(f"- Author: {art.author}")
    lines.append(f"- Published: {art.published_at} ({art.time_ago})")
    lines.append(f"- Read time: {art.read_time}")
    lines.append(f"- Source: {art.source}")
    if art.has_external_link:
        lines.append(f"- Original: {art.url}")
    lines.append("")

    if art.prediction:
        pred = art.prediction
        lines.append(
            f"**{pred.symbol}** {pred.current_price} ({pred.price_change}) · "
            f"Market cap {pred.market_cap} · 24h volume {pred.volume_24h}"
        )
        lines.append("")

    if art.excerpt:
        lines.extend([f"_{art.excerpt}_", ""])
    lines.extend([art.content, ""])
    lines.append(" ".join(f"#{tag}" for tag in art.tags))
    lines.append("")

    if view.related:
        lines.extend(["## Related", ""])
        for item in view.related:
            lines.append(f"- {item.title} ({item.time_ago}, {item.category})")
        lines.append("")

    return "\n".join(lines)


def render_json(view: DetailView) -> str:
    payload = {
        "article": view.article.to_dict(),
        "related": [item.to_dict() for item in view.related],
        "error": view.error,
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def render(view: DetailView, fmt: str) -> str:
    if fmt == "html":
        return render_html(view)
    if fmt == "markdown":
        return render_markdown(view)
    if fmt == "json":
        return render_json(view)
    raise ValueError(f"Unsupported format: {fmt}. Supported: {', '.join(FORMATS)}")


def write_output(text: str, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
