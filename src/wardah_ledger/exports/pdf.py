"""PDF export of the trial balance (landscape A4, gridded table)."""

import io
from collections.abc import Sequence
from datetime import date
from pathlib import Path

import arabic_reshaper
import structlog
from bidi.algorithm import get_display
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from wardah_ledger import labels
from wardah_ledger.config import get_settings
from wardah_ledger.models import Language, TrialBalanceRow, TrialBalanceTotals

logger = structlog.get_logger(__name__)

ARABIC_FONT_NAME = "WardahArabic"
FALLBACK_FONT = "Helvetica"

FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/amiri/Amiri-Regular.ttf",
    "/usr/share/fonts/truetype/noto/NotoNaskhArabic-Regular.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    r"C:\Windows\Fonts\arial.ttf",
)

MARGIN = 24
HEADER_COLOR = colors.Color(66 / 255, 139 / 255, 202 / 255)
TOTALS_COLOR = colors.Color(240 / 255, 240 / 255, 240 / 255)
COLUMN_RATIOS = (0.09, 0.27, 0.105, 0.105, 0.105, 0.105, 0.105, 0.105)


def shape_text(text: str, language: Language) -> str:
    """Reshape and reorder Arabic text for left-to-right PDF drawing."""
    if language != "ar":
        return text
    return get_display(arabic_reshaper.reshape(text))


def register_font(font_path: Path | str | None = None) -> str:
    """Register an Arabic-capable TTF font and return its name.

    Tries ``font_path`` (or the configured ``PDF_FONT_PATH``) then a few
    common system locations; falls back to Helvetica.
    """
    if ARABIC_FONT_NAME in pdfmetrics.getRegisteredFontNames():
        return ARABIC_FONT_NAME

    configured = font_path or get_settings().pdf_font_path
    candidates = ([str(configured)] if configured else []) + list(FONT_CANDIDATES)
    for candidate in candidates:
        if not Path(candidate).exists():
            continue
        try:
            pdfmetrics.registerFont(TTFont(ARABIC_FONT_NAME, candidate))
        except TTFError as e:
            logger.warning("pdf_font_unusable", path=candidate, error=str(e))
            continue
        logger.debug("pdf_font_registered", path=candidate)
        return ARABIC_FONT_NAME

    logger.warning("pdf_arabic_font_missing", fallback=FALLBACK_FONT)
    return FALLBACK_FONT


def _format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def _money(value) -> str:
    return f"{value:.2f}"


def build_pdf(
    rows: Sequence[TrialBalanceRow],
    totals: TrialBalanceTotals,
    from_date: date,
    as_of_date: date,
    language: Language = "ar",
    font_path: Path | str | None = None,
) -> bytes:
    """Render the report and return the PDF bytes."""
    font_name = register_font(font_path)

    def ar(text: str) -> str:
        return shape_text(text, language)

    buffer = io.BytesIO()
    pagesize = landscape(A4)
    doc = SimpleDocTemplate(
        buffer,
        pagesize=pagesize,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=labels.TITLE[language],
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "tb_title", parent=styles["Title"], fontName=font_name, fontSize=16, alignment=1
    )
    subtitle_style = ParagraphStyle(
        "tb_subtitle", parent=styles["Normal"], fontName=font_name, fontSize=10, alignment=1
    )

    subtitle = (
        f"{labels.FROM[language]}: {_format_date(from_date)} "
        f"{labels.TO[language]}: {_format_date(as_of_date)}"
    )
    elements = [
        Paragraph(ar(labels.TITLE[language]), title_style),
        Paragraph(ar(subtitle), subtitle_style),
        Spacer(1, 10),
    ]

    data = [[ar(header) for header in labels.PDF_HEADERS[language]]]
    for row in rows:
        data.append(
            [row.account_code, ar(row.display_name(language))]
            + [_money(value) for value in row.amounts()]
        )
    data.append(["", ar(labels.TOTALS[language])] + [_money(value) for value in totals.amounts()])

    table_width = pagesize[0] - 2 * MARGIN
    table = Table(
        data,
        colWidths=[table_width * ratio for ratio in COLUMN_RATIOS],
        repeatRows=1,
        hAlign="CENTER",
    )
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), font_name),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("BACKGROUND", (0, -1), (-1, -1), TOTALS_COLOR),
                ("TEXTCOLOR", (0, -1), (-1, -1), colors.black),
            ]
        )
    )
    elements.append(table)

    doc.build(elements)
    return buffer.getvalue()


def export_to_pdf(
    rows: Sequence[TrialBalanceRow],
    totals: TrialBalanceTotals,
    from_date: date,
    as_of_date: date,
    language: Language = "ar",
    directory: Path | str = ".",
    font_path: Path | str | None = None,
) -> Path:
    """Write ``trial-balance-<as_of_date>.pdf`` into ``directory``."""
    path = Path(directory) / labels.export_filename(as_of_date.isoformat(), "pdf")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(build_pdf(rows, totals, from_date, as_of_date, language, font_path))
    logger.info("trial_balance_exported", format="pdf", path=str(path), rows=len(rows))
    return path
