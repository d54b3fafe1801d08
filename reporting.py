"""
Ember — Reports & Exports
  • render_assessment_pdf — printable assessment results (reportlab)
  • build_export          — JSON backup of the planner history
"""

import datetime as dt
import io
import logging
from typing import Any, Iterable, List, Optional
from xml.sax.saxutils import escape

from reportlab.graphics.shapes import Drawing, Rect
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    BaseDocTemplate, Frame, PageBreak, PageTemplate, Paragraph, Spacer, Table, TableStyle,
)

from analytics_engine import TrackingPeriod, analytics_engine
from assessment_engine import AssessmentResult, impact_label, top_priorities
from planner import DailyEntry
from protocols import ProtocolBundle, lifestyle_title, lookup

log = logging.getLogger(__name__)

ACCENT = colors.Color(139 / 255, 92 / 255, 246 / 255)
MUTED = colors.Color(100 / 255, 100 / 255, 100 / 255)
PRIORITY = colors.Color(239 / 255, 68 / 255, 68 / 255)
BAR_TRACK = colors.Color(229 / 255, 231 / 255, 235 / 255)

IMPACT_COLORS = {
    "minimal":  colors.Color(16 / 255, 185 / 255, 129 / 255),
    "moderate": colors.Color(245 / 255, 158 / 255, 11 / 255),
    "major":    PRIORITY,
}

FOOTER_LINES = (
    "© The Ember Method. Empowering women's health through personalized wellness.",
    "This assessment is for educational purposes only and does not replace professional medical advice.",
)


# ══════════════════════════════════════════════════════════════════════════════
# FILENAMES
# ══════════════════════════════════════════════════════════════════════════════

def report_filename(result: AssessmentResult) -> str:
    return f"ember-method-assessment-{result.completed_at.date().isoformat()}.pdf"


def export_filename(exported_at: Optional[dt.datetime] = None) -> str:
    exported_at = exported_at or dt.datetime.now(dt.timezone.utc)
    return f"ember-wellness-data-{exported_at.date().isoformat()}.json"


# ══════════════════════════════════════════════════════════════════════════════
# JSON EXPORT
# ══════════════════════════════════════════════════════════════════════════════

def build_export(
    entries: Iterable[DailyEntry],
    tracking_period: TrackingPeriod,
    exported_at: Optional[dt.datetime] = None,
) -> dict:
    """
    Planner backup document. Summary averages are left unrounded;
    an empty history exports zeros.
    """
    exported_at = exported_at or dt.datetime.now(dt.timezone.utc)
    entries = list(entries)
    summary = analytics_engine.summarize(entries)
    return {
        "trackingPeriod": TrackingPeriod(tracking_period).value,
        "entries": [e.to_dict() for e in entries],
        "exportDate": exported_at.isoformat(),
        "summary": {
            "totalDays": summary.total_days,
            "avgCompletion": summary.avg_completion,
            "avgWellness": summary.avg_wellness,
        },
    }


# ══════════════════════════════════════════════════════════════════════════════
# PDF REPORT
# ══════════════════════════════════════════════════════════════════════════════

def _score_bar(score: int, max_score: int, level: str, width: float) -> Drawing:
    height = 4
    drawing = Drawing(width, height + 2)
    drawing.add(Rect(0, 1, width, height, fillColor=BAR_TRACK, strokeColor=None))
    filled = width * min(score / max_score, 1.0) if max_score else 0
    if filled > 0:
        drawing.add(Rect(0, 1, filled, height, fillColor=IMPACT_COLORS.get(level, MUTED), strokeColor=None))
    return drawing


def _bullets(items: Iterable[str], style: ParagraphStyle) -> List[Paragraph]:
    return [Paragraph(f"• {escape(item)}", style) for item in items]


def _protocol_story(protocol: ProtocolBundle, styles, body: ParagraphStyle, muted: ParagraphStyle) -> List[Any]:
    heading = ParagraphStyle("protocol_title", parent=styles["Heading1"], textColor=ACCENT)
    story: List[Any] = [
        PageBreak(),
        Paragraph("Your Personalized Protocol", heading),
        Paragraph(escape(protocol.description), muted),
        Spacer(1, 12),
        Paragraph("Core Supplement Protocol", styles["Heading2"]),
    ]
    story += _bullets((s.summary for s in protocol.supplements), body)
    story.append(Spacer(1, 8))

    story.append(Paragraph("Immediate Lifestyle Changes", styles["Heading2"]))
    for key, items in protocol.lifestyle.items():
        story.append(Paragraph(f"<b>{escape(lifestyle_title(key))}</b>", body))
        story += _bullets(items, body)
    story.append(Spacer(1, 8))

    if protocol.optional:
        story.append(Paragraph("Optional Support", styles["Heading2"]))
        story.append(Paragraph(
            "Consider these if no improvement after following the core protocol for 2-4 weeks:", muted
        ))
        story += _bullets(protocol.optional, muted)
    return story


def render_assessment_pdf(result: AssessmentResult, protocol: Optional[ProtocolBundle] = None) -> bytes:
    """
    Render the results page as a PDF document and return its bytes.
    The protocol defaults to the one for the result's primary profile and
    is appended on its own page when one exists.
    """
    protocol = protocol or lookup(result.primary_profile)

    styles = getSampleStyleSheet()
    body = ParagraphStyle("body", parent=styles["Normal"], fontSize=10, leading=13)
    muted = ParagraphStyle("muted", parent=body, textColor=MUTED)
    small = ParagraphStyle("small", parent=muted, fontSize=8, leading=10)
    title = ParagraphStyle("report_title", parent=styles["Title"], textColor=ACCENT)
    centered = ParagraphStyle("centered", parent=muted, alignment=1)

    def _on_page(c, doc):
        c.saveState()
        c.setFont("Helvetica", 8)
        c.setFillColor(MUTED)
        c.drawCentredString(A4[0] / 2, 18 * mm, FOOTER_LINES[0])
        c.drawCentredString(A4[0] / 2, 14 * mm, FOOTER_LINES[1])
        c.drawRightString(A4[0] - 15 * mm, 8 * mm, f"Page {c.getPageNumber()}")
        c.restoreState()

    buffer = io.BytesIO()
    doc = BaseDocTemplate(
        buffer, pagesize=A4, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=72,
        title="The Ember Method Assessment Results",
    )
    frame = Frame(doc.leftMargin, doc.bottomMargin, doc.width, doc.height, id="normal")
    doc.addPageTemplates([PageTemplate(id="with_footer", frames=frame, onPage=_on_page)])

    story: List[Any] = [
        Paragraph("The Ember Method Assessment Results", title),
        Paragraph(f"Completed on {result.completed_at.strftime('%B %d, %Y')}", centered),
        Spacer(1, 16),
        Paragraph("Your Primary Profile", ParagraphStyle("profile_heading", parent=styles["Heading2"], textColor=ACCENT)),
        Paragraph(f"<b>{escape(result.primary_profile)}</b>", styles["Heading3"]),
        Paragraph(
            "This profile is based on your highest scoring section and represents your primary health pattern.",
            muted,
        ),
        Spacer(1, 14),
        Paragraph("Section Scores", styles["Heading2"]),
    ]

    bar_width = doc.width - 60
    rows = []
    for s in result.section_scores:
        rows.append([Paragraph(f"<b>{escape(s.title)}</b>", body), f"{s.score}/{s.max_score}"])
        rows.append([_score_bar(s.score, s.max_score, s.impact_level, bar_width), ""])
        rows.append([Paragraph(impact_label(s.impact_level), small), ""])
    table = Table(rows, colWidths=[bar_width, 60], hAlign="LEFT")
    table.setStyle(TableStyle([
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ("TOPPADDING", (0, 0), (-1, -1), 1),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 1),
    ]))
    story.append(table)

    priorities = top_priorities(result)
    if priorities:
        story += [
            Spacer(1, 14),
            Paragraph("Priority Areas for Attention", ParagraphStyle("priority", parent=styles["Heading2"], textColor=PRIORITY)),
            Paragraph("These areas scored 17+ points and should be your primary focus:", muted),
            Spacer(1, 6),
        ]
        for i, s in enumerate(priorities, start=1):
            story.append(Paragraph(
                f"<font color='#ef4444'>#{i}</font>&nbsp;&nbsp;{escape(s.title)} ({s.score}/{s.max_score} points)", body
            ))

    if protocol:
        story += _protocol_story(protocol, styles, body, muted)

    doc.build(story)
    pdf = buffer.getvalue()
    log.debug("Rendered assessment report: profile=%s bytes=%d", result.primary_profile, len(pdf))
    return pdf
