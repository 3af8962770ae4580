"""
Report Export Renderers (``hr_modules.reporting.exporters``).

Responsibility
--------------
Serialize an ordered sequence of ``EmployeeCountRow`` into a downloadable
byte payload.  Two variants share one contract:

* ``SpreadsheetRenderer`` -- single-sheet Office Open XML workbook (openpyxl).
* ``DocumentRenderer`` -- paginated PDF table (reportlab platypus).

Formats map to renderer classes through ``RENDERERS``; adding a format means
adding an ``ExportFormat`` member and a ``@register_renderer`` class.

Invariants enforced
-------------------
* Input order is preserved exactly.  Renderers never sort.
* Rows above ``ReportingConfig.max_export_rows`` are rejected before any
  output is produced.  Nothing is ever truncated.
* Any writer fault surfaces as ``ExportGenerationError``; a partial or
  corrupt payload is never returned.
* Each call writes to its own ``BytesIO`` buffer.

Determinism
-----------
PDFs are built in reportlab's invariant mode: identical rows and identical
``generated_at`` produce byte-identical files.  Workbooks are identical in
content only -- openpyxl stamps the ``modified`` document property and the
zip entry times with the wall clock at save time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timezone
from io import BytesIO
from typing import ClassVar
from xml.sax.saxutils import escape

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from hr_kernel.exceptions import ExportGenerationError, ExportRowLimitExceededError
from hr_kernel.logging_config import get_logger

from hr_modules.reporting.config import ReportingConfig
from hr_modules.reporting.models import EmployeeCountRow, ExportFormat

logger = get_logger("modules.reporting.exporters")

NO_DATA_MARKER = "No data available"

_PAGE_SIZES = {"A4": A4, "LETTER": letter}


def column_headers(config: ReportingConfig) -> tuple[str, str, str]:
    """Stable column labels shared by every export format."""
    label = config.organization_label
    return (f"{label} ID", f"{label} Name", "Employee Count")


class ReportRenderer(ABC):
    """
    Base class for employee-count report renderers.

    Contract
    --------
    ``render(rows)`` returns the complete file as bytes or raises
    ``ExportGenerationError``.

    Guarantees
    ----------
    * Validation (row type, count shape, row limit) runs before the writer
      is touched.
    * Renderers hold no per-call state; one instance may render many times,
      from several threads.
    """

    format: ClassVar[ExportFormat]
    content_type: ClassVar[str]
    file_extension: ClassVar[str]

    def __init__(
        self,
        config: ReportingConfig | None = None,
        generated_at: datetime | None = None,
    ):
        self._config = config or ReportingConfig.with_defaults()
        self._generated_at = generated_at

    @property
    def headers(self) -> tuple[str, str, str]:
        return column_headers(self._config)

    def render(self, rows: Iterable[EmployeeCountRow]) -> bytes:
        """
        Render rows into this renderer's file format.

        Raises:
            ExportRowLimitExceededError: More rows than max_export_rows.
            ExportGenerationError: Malformed row or writer failure.
        """
        checked = self._validate(rows)
        try:
            payload = self._render(checked)
        except ExportGenerationError:
            raise
        except Exception as exc:
            logger.error(
                "export_render_failed",
                extra={"format": self.format.value, "row_count": len(checked)},
                exc_info=True,
            )
            raise ExportGenerationError(self.format.value, str(exc)) from exc

        logger.info(
            "export_rendered",
            extra={
                "format": self.format.value,
                "row_count": len(checked),
                "byte_count": len(payload),
            },
        )
        return payload

    def _validate(self, rows: Iterable[EmployeeCountRow]) -> tuple[EmployeeCountRow, ...]:
        checked = tuple(rows)
        if len(checked) > self._config.max_export_rows:
            raise ExportRowLimitExceededError(
                self.format.value, len(checked), self._config.max_export_rows
            )
        for index, row in enumerate(checked):
            if not isinstance(row, EmployeeCountRow):
                raise ExportGenerationError(
                    self.format.value,
                    f"row {index} is {type(row).__name__}, expected EmployeeCountRow",
                )
            count = row.employee_count
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ExportGenerationError(
                    self.format.value,
                    f"row {index} has malformed employee_count {count!r}",
                )
        return checked

    @abstractmethod
    def _render(self, rows: tuple[EmployeeCountRow, ...]) -> bytes:
        """Write already-validated rows to a fresh buffer."""


RENDERERS: dict[ExportFormat, type[ReportRenderer]] = {}


def register_renderer(cls: type[ReportRenderer]) -> type[ReportRenderer]:
    """Class decorator registering a renderer for its format."""
    RENDERERS[cls.format] = cls
    return cls


def get_renderer(
    export_format: ExportFormat | str,
    config: ReportingConfig | None = None,
    generated_at: datetime | None = None,
) -> ReportRenderer:
    """
    Build the renderer registered for a format.

    Raises:
        UnsupportedExportFormatError: Unknown format.
    """
    fmt = ExportFormat.parse(export_format)
    return RENDERERS[fmt](config=config, generated_at=generated_at)


@register_renderer
class SpreadsheetRenderer(ReportRenderer):
    """
    Single-sheet workbook: header in row 1, one row per input row after it.

    Organization id and employee count are numeric cells so spreadsheet
    users can sum and filter them.
    """

    format = ExportFormat.SPREADSHEET
    content_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    file_extension = ".xlsx"

    _COLUMN_WIDTHS = (18, 48, 18)

    def _render(self, rows: tuple[EmployeeCountRow, ...]) -> bytes:
        wb = Workbook()
        ws = wb.active
        # Excel caps sheet titles at 31 characters
        ws.title = self._config.report_title[:31]

        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill("solid", fgColor="1F4E78")
        for col, label in enumerate(self.headers, start=1):
            cell = ws.cell(row=1, column=col, value=label)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")

        for row_idx, row in enumerate(rows, start=2):
            ws.cell(row=row_idx, column=1, value=row.organization_id)
            name_cell = ws.cell(row=row_idx, column=2, value=row.organization_name)
            # Names starting with "=" must stay text, not become formulas
            name_cell.data_type = "s"
            ws.cell(row=row_idx, column=3, value=row.employee_count)

        for col, width in enumerate(self._COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width
        ws.freeze_panes = "A2"

        wb.properties.title = self._config.report_title
        if self._generated_at is not None:
            wb.properties.created = self._generated_at.astimezone(timezone.utc).replace(
                tzinfo=None
            )

        # Save stamps the modified time and zip entry times, so repeated renders
        # match cell for cell but not byte for byte.
        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()


@register_renderer
class DocumentRenderer(ReportRenderer):
    """
    Paginated PDF: title block, then a table whose header row repeats at the
    top of every page.  An empty report shows the header and a "no data" row.
    """

    format = ExportFormat.DOCUMENT
    content_type = "application/pdf"
    file_extension = ".pdf"

    _MARGIN = 0.75 * inch

    def _render(self, rows: tuple[EmployeeCountRow, ...]) -> bytes:
        buf = BytesIO()
        page_size = _PAGE_SIZES[self._config.pdf_page_size]
        doc = SimpleDocTemplate(
            buf,
            pagesize=page_size,
            leftMargin=self._MARGIN,
            rightMargin=self._MARGIN,
            topMargin=self._MARGIN,
            bottomMargin=self._MARGIN,
            title=self._config.report_title,
            invariant=1,
            pageCompression=1 if self._config.pdf_compress else 0,
        )

        styles = getSampleStyleSheet()
        cell_style = styles["BodyText"]
        subtitle = f"{len(rows)} organizations"
        if self._generated_at is not None:
            generated = self._generated_at.astimezone(timezone.utc)
            subtitle = f"Generated {generated.strftime('%Y-%m-%d %H:%M')} UTC - {subtitle}"
        story = [
            Paragraph(escape(self._config.report_title), styles["Title"]),
            Paragraph(subtitle, styles["Normal"]),
            Spacer(1, 12),
        ]

        data: list[list] = [list(self.headers)]
        for row in rows:
            data.append([
                str(row.organization_id),
                Paragraph(escape(row.organization_name), cell_style),
                str(row.employee_count),
            ])
        if not rows:
            data.append([NO_DATA_MARKER, "", ""])

        usable_width = page_size[0] - 2 * self._MARGIN
        col_widths = [usable_width * 0.2, usable_width * 0.55, usable_width * 0.25]
        table = Table(data, colWidths=col_widths, repeatRows=1)

        commands = [
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1F4E78")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("ALIGN", (0, 1), (0, -1), "RIGHT"),
            ("ALIGN", (2, 1), (2, -1), "RIGHT"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#EEF3F8")]),
        ]
        if not rows:
            commands.extend([
                ("SPAN", (0, 1), (-1, 1)),
                ("ALIGN", (0, 1), (-1, 1), "CENTER"),
                ("FONTNAME", (0, 1), (-1, 1), "Helvetica-Oblique"),
            ])
        table.setStyle(TableStyle(commands))
        story.append(table)

        doc.build(story, onFirstPage=_draw_page_number, onLaterPages=_draw_page_number)
        return buf.getvalue()


def _draw_page_number(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 8)
    canvas.drawRightString(
        doc.pagesize[0] - doc.rightMargin,
        doc.bottomMargin / 2,
        f"Page {doc.page}",
    )
    canvas.restoreState()
