"""Serializers for delivery reports."""

from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Sequence

from docx import Document
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import LongTable, Paragraph, SimpleDocTemplate, Spacer, TableStyle

from ...models.domain import UNKNOWN_STATUS_LABEL, Delivery

REPORT_TITLE = "Relatório de Entregas"

REPORT_COLUMNS: list[tuple[str, int]] = [
    ("Nome", 20),
    ("Status", 12),
    ("Data", 12),
    ("Telefone", 15),
    ("Endereço", 30),
    ("Bairro", 15),
    ("Cidade", 15),
    ("Valor", 12),
    ("Pagamento", 12),
    ("Entregador", 12),
    ("Volume", 10),
    ("Observações", 30),
    ("Horário", 10),
]

_COLUMN_NAMES = [name for name, _ in REPORT_COLUMNS]

# Label pairs for each row of the per-delivery Word table, left and right cell.
_DOCX_ROWS = [
    ("Data", "Endereço"),
    ("Telefone", "Bairro"),
    ("Valor", "Cidade"),
    ("Pagamento", "Entregador"),
    ("Volume", "Horário"),
]


def _address(delivery: Delivery) -> str:
    parts = [part for part in (delivery.street, delivery.number) if part]
    return ", ".join(parts)


def delivery_row(delivery: Delivery) -> list[str]:
    return [
        delivery.customer_name or "",
        delivery.status.label if delivery.status else UNKNOWN_STATUS_LABEL,
        delivery.day.strftime("%d/%m/%Y") if delivery.day else "",
        delivery.phone or "N/A",
        _address(delivery),
        delivery.neighbourhood or "",
        delivery.city or "",
        f"R$ {delivery.amount:.2f}" if delivery.amount is not None else "",
        delivery.payment or "",
        delivery.assigned_to.name if delivery.assigned_to else "",
        delivery.volume or "",
        delivery.notes or "-",
        str(delivery.scheduled),
    ]


def _generated_line(generated_at: datetime | None) -> str:
    generated_at = generated_at or datetime.now()
    return f"Gerado em: {generated_at.strftime('%d/%m/%Y')} às {generated_at.strftime('%H:%M:%S')}"


def deliveries_to_csv(deliveries: Sequence[Delivery]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(_COLUMN_NAMES)
    for delivery in deliveries:
        writer.writerow(delivery_row(delivery))
    return buffer.getvalue()


def deliveries_to_xlsx(deliveries: Sequence[Delivery]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Entregas"
    sheet.append(_COLUMN_NAMES)
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    for index, (_, width) in enumerate(REPORT_COLUMNS, start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width
    for delivery in deliveries:
        sheet.append(delivery_row(delivery))

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _draw_pdf_footer(canvas, doc) -> None:
    canvas.saveState()
    canvas.setFont("Helvetica", 7)
    canvas.drawString(doc.leftMargin, 8 * mm, REPORT_TITLE)
    canvas.drawRightString(doc.pagesize[0] - doc.rightMargin, 8 * mm, f"Página {canvas.getPageNumber()}")
    canvas.restoreState()


def deliveries_to_pdf(deliveries: Sequence[Delivery], generated_at: datetime | None = None) -> bytes:
    """Render the report as a landscape A4 table with a repeated header row.

    Column widths keep the same proportions as the spreadsheet export.
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=10 * mm,
        rightMargin=10 * mm,
        topMargin=12 * mm,
        bottomMargin=15 * mm,
        title=REPORT_TITLE,
    )
    styles = getSampleStyleSheet()
    total_width = sum(width for _, width in REPORT_COLUMNS)
    col_widths = [doc.width * width / total_width for _, width in REPORT_COLUMNS]

    table = LongTable(
        [_COLUMN_NAMES] + [delivery_row(delivery) for delivery in deliveries],
        colWidths=col_widths,
        repeatRows=1,
    )
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 6),
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F0F0F0")),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#C8C8C8")),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )

    story = [
        Paragraph(REPORT_TITLE, styles["Title"]),
        Paragraph(_generated_line(generated_at), styles["Normal"]),
        Spacer(1, 4 * mm),
        table,
    ]
    doc.build(story, onFirstPage=_draw_pdf_footer, onLaterPages=_draw_pdf_footer)
    return buffer.getvalue()


def deliveries_to_docx(deliveries: Sequence[Delivery], generated_at: datetime | None = None) -> bytes:
    """Render the report as a Word document with one two-column table per delivery."""
    document = Document()
    document.add_heading(REPORT_TITLE, level=1)
    document.add_paragraph(_generated_line(generated_at))

    for index, delivery in enumerate(deliveries, start=1):
        fields = dict(zip(_COLUMN_NAMES, delivery_row(delivery)))
        table = document.add_table(rows=0, cols=2)
        table.style = "Table Grid"

        header = table.add_row().cells
        header[0].text = f"#{index} - {fields['Nome']}"
        header[1].text = fields["Status"]
        for left, right in _DOCX_ROWS:
            cells = table.add_row().cells
            cells[0].text = f"{left}: {fields[left]}"
            cells[1].text = f"{right}: {fields[right]}"
        notes = table.add_row().cells
        merged = notes[0].merge(notes[1])
        merged.text = f"Observações: {fields['Observações']}"

        document.add_paragraph()

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()
