"""
CSV export of a project's rooms and totals.

Semicolon-delimited so it opens cleanly in spreadsheets set to a comma
decimal locale. Layout:

    Name;Length (m);Width (m);Openings (m²)
    <one row per room>
    <blank line>
    ;;;;Wall Area (m²);<value>;Paint Required (L);<value>;...
"""

import csv
import re
from io import StringIO

from .config import settings

ROOM_HEADER = ["Name", "Length (m)", "Width (m)", "Openings (m²)"]

_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|\r\n]+')


def total_labels() -> list:
    """(label, estimate key) pairs for the totals row, in output order."""
    cur = settings.CURRENCY_SYMBOL
    return [
        ("Wall Area (m²)", "total_wall_area"),
        ("Paint Required (L)", "paint_volume"),
        (f"Paint Cost ({cur})", "paint_cost"),
        (f"Render Cost ({cur})", "plaster_cost"),
        (f"Insulation Cost ({cur})", "insulation_cost"),
        (f"Total Cost ({cur})", "total_cost"),
    ]


def generate_csv(project, estimate: dict) -> str:
    """Build the CSV text for a project and its computed estimate."""
    output = StringIO()
    writer = csv.writer(output, delimiter=";", lineterminator="\n", quoting=csv.QUOTE_MINIMAL)

    writer.writerow(ROOM_HEADER)
    for room in project.rooms:
        writer.writerow([room.name, _fmt_number(room.length), _fmt_number(room.width),
                         _fmt_number(room.openings)])

    writer.writerow([])

    # Leading blanks line the totals up after the four room columns
    totals = ["", "", "", ""]
    for label, key in total_labels():
        totals.extend([label, _fmt_amount(estimate.get(key, 0))])
    writer.writerow(totals)

    return output.getvalue()


def csv_filename(project_name: str) -> str:
    """File name for the download: the project name, or the fallback, plus .csv"""
    base = _UNSAFE_FILENAME.sub("_", (project_name or "").strip()) or settings.CSV_FALLBACK_NAME
    return f"{base}.csv"


def _fmt_number(value) -> str:
    """Room dimensions as typed: 6.0 -> '6', 3.5 -> '3.5'."""
    try:
        text = f"{float(value):.6f}"
    except (ValueError, TypeError):
        return "0"
    return text.rstrip("0").rstrip(".") or "0"


def _fmt_amount(value) -> str:
    """Areas, volumes and money to 2 decimals."""
    try:
        return f"{float(value):.2f}"
    except (ValueError, TypeError):
        return "0.00"
