# clients/export.py
import csv
import io

from utils.errors import SerializationError

EXPORT_HEADER = [
    "Title",
    "Name",
    "Surname",
    "Phone Number",
    "ID Number",
    "Email",
    "Notes",
    "Opt-in Date",
    "Preferred Time",
    "Offer ID",
]


def _row(c) -> list:
    return [
        c.title or "",
        c.name or "",
        c.surname or "",
        c.phone_number or "",
        c.id_number or "",
        c.email or "",
        c.notes or "",
        c.optindate.isoformat() if c.optindate else "",
        c.preferred_time.strftime("%H:%M:%S") if c.preferred_time else "",
        c.offer_id or "",
    ]


def render_csv(rows) -> bytes:
    """Serializes client rows to UTF-8 CSV under the fixed export header."""
    output = io.StringIO()
    try:
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(EXPORT_HEADER)
        for c in rows:
            writer.writerow(_row(c))
        return output.getvalue().encode("utf-8")
    except (csv.Error, UnicodeEncodeError, AttributeError) as e:
        raise SerializationError(str(e)) from e
