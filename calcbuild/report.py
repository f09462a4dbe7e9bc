"""
Printable project report.

Generates a one-document PDF of a project: header, parameters, per-room wall
areas and the material totals. Uses fpdf2 (pure Python, no system
dependencies), so printing is just "open the PDF and print it".

Sections:
1. Header (company, project name, date)
2. Parameters
3. Rooms
4. Totals
"""

from datetime import datetime

from fpdf import FPDF

from .config import settings


def _fmt(amount) -> str:
    """Format a number as 1,234.56"""
    try:
        return f"{float(amount):,.2f}"
    except (ValueError, TypeError):
        return "0.00"


def _money(amount) -> str:
    return f"{_fmt(amount)} {settings.CURRENCY_SYMBOL}"


def _safe(text: str) -> str:
    """Replace characters the built-in PDF fonts (latin-1) can't render."""
    if not text:
        return ""
    return (
        text
        .replace("€", "EUR")  # euro sign
        .replace("—", " - ")  # em dash
        .replace("–", "-")    # en dash
        .replace("’", "'")    # right single quote
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class ReportPDF(FPDF):
    """PDF layout helpers for the project report."""

    def __init__(self, company_name=""):
        super().__init__()
        self.company_name = company_name
        self.set_auto_page_break(auto=True, margin=20)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """cols: [(label, width), ...]; every column but the first is numeric."""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for i, (label, width) in enumerate(cols):
            self.cell(width, 6, _safe(label), border="B", fill=True, align="L" if i == 0 else "R")
        self.ln()

    def table_row(self, values, widths, bold=False):
        self.set_font("Helvetica", "B" if bold else "", 8)
        for i, (val, width) in enumerate(zip(values, widths)):
            self.cell(width, 5.5, _safe(str(val)), align="L" if i == 0 else "R")
        self.ln()

    def value_row(self, label, value, bold=False):
        self.set_font("Helvetica", "B" if bold else "", 9)
        self.cell(140, 6, _safe(label), align="L", border="T" if bold else 0)
        self.cell(50, 6, _safe(value), align="R", border="T" if bold else 0)
        self.ln()


def generate_report_pdf(project, estimate: dict, generated_at: datetime = None) -> bytes:
    """
    Generate the printable report.

    Args:
        project: Project model
        estimate: Estimator output for the same project
        generated_at: date printed in the header (defaults to now)

    Returns:
        PDF bytes
    """
    generated_at = generated_at or datetime.now()
    title = project.project_name or settings.UNNAMED_PROJECT_KEY

    pdf = ReportPDF(company_name=settings.COMPANY_NAME)
    pdf.alias_nb_pages()
    pdf.add_page()

    # ── Header ──
    pdf.set_font("Helvetica", "B", 20)
    pdf.cell(0, 10, _safe(settings.COMPANY_NAME), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 8, _safe(f"Project: {title}"), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, f"Date: {generated_at.strftime('%B %d, %Y')}", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(6)

    # ── Parameters ──
    pdf.section_header("PARAMETERS")
    pdf.value_row("Wall height (m)", _fmt(project.wall_height))
    pdf.value_row("Waste margin (%)", _fmt(project.wall_waste))
    pdf.value_row("Paint coverage (m²/L)", _fmt(project.paint_coverage))
    pdf.value_row("Paint price (per L)", _money(project.paint_price))
    pdf.value_row("Render price (per m²)", _money(project.plaster_price))
    pdf.value_row("Insulation price (per m²)", _money(project.insulation_price))
    pdf.ln(4)

    # ── Rooms ──
    pdf.section_header("ROOMS")
    cols = [("Room", 60), ("Length (m)", 25), ("Width (m)", 25), ("Openings (m²)", 30), ("Net wall (m²)", 50)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)

    areas = estimate.get("rooms", [])
    for i, room in enumerate(project.rooms):
        net = areas[i]["net_wall_area"] if i < len(areas) else 0
        pdf.table_row(
            [room.name[:35], _fmt(room.length), _fmt(room.width), _fmt(room.openings), _fmt(net)],
            widths,
        )
    if not project.rooms:
        pdf.set_font("Helvetica", "I", 8)
        pdf.cell(0, 6, "No rooms", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # ── Totals ──
    pdf.section_header("TOTALS")
    pdf.value_row("Wall area incl. waste (m²)", _fmt(estimate.get("total_wall_area", 0)))
    pdf.value_row("Paint required (L)", _fmt(estimate.get("paint_volume", 0)))
    pdf.value_row("Paint cost", _money(estimate.get("paint_cost", 0)))
    pdf.value_row("Render cost", _money(estimate.get("plaster_cost", 0)))
    pdf.value_row("Insulation cost", _money(estimate.get("insulation_cost", 0)))
    pdf.value_row("Total cost", _money(estimate.get("total_cost", 0)), bold=True)

    return bytes(pdf.output())
