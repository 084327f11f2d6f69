import csv
import io
import logging
from typing import Any, Dict, List

from .assets import AssetKind
from .store import ReportStore

logger = logging.getLogger(__name__)


def _fmt(value) -> str:
    return "" if value is None else str(value)


def list_reports(store: ReportStore, kind: AssetKind) -> List[Dict[str, Any]]:
    """Return JSON-ready rows for ``kind``, newest first."""
    items = []
    for r in store.list(kind):
        items.append({
            "id": r["id"],
            kind.json_key: r[kind.id_column],
            "damage": r["damage"],
            "location": r["location"],
            "image_path": r["image_path"],
            "timestamp": _fmt(r["timestamp"]),
        })
    return items


def export_csv(store: ReportStore, kind: AssetKind) -> str:
    """Render every row of ``kind`` as CSV under a fixed header.

    Fields holding a delimiter, quote or line break are quoted with
    embedded quotes doubled.
    """
    rows = store.list(kind)
    logger.info("Generating CSV for %d %s records", len(rows), kind.name)

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=list(kind.columns), lineterminator="\n")
    writer.writeheader()
    for r in rows:
        writer.writerow({col: _fmt(r[col]) for col in kind.columns})
    return buf.getvalue()
