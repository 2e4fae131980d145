from __future__ import annotations

import argparse
import csv
from pathlib import Path
from typing import Any, Dict, List

from invoicegen.engine.templates import TEMPLATES, TemplateDescriptor


STYLE_KEYS = (
    "style.layout",
    "style.table_style",
    "style.corner_radius",
    "style.logo_position",
    "style.primary_color",
    "style.font_family",
)


def _flatten(value: Any) -> str:
    """
    Copy is stored as a tuple of lines. Spreadsheet tools break rows on raw
    newlines, so lines are joined with a visible " \\n " marker instead.
    """
    if value is None:
        return ""
    if isinstance(value, (tuple, list)):
        text = "\n".join(str(part) for part in value)
    else:
        text = str(value)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return " ".join(text.replace("\n", " \\n ").split())


def _row(descriptor: TemplateDescriptor) -> Dict[str, str]:
    row = {
        "id": descriptor.key,
        "title": descriptor.title,
        "industry": descriptor.industry,
        "invoice_title": _flatten(descriptor.defaults.get("label.invoice_title")),
        "sections": "|".join(descriptor.skeleton),
        "columns": "|".join(descriptor.columns),
        "fields": "|".join(descriptor.extra_fields),
        "due_days": str(descriptor.due_days),
        "service_charge": "yes" if descriptor.service_charge else "no",
    }
    for key in STYLE_KEYS:
        row[key.split(".", 1)[1]] = _flatten(descriptor.defaults.get(key))
    row["copy"] = " | ".join(
        f"{key.split('.', 1)[1]}: {_flatten(value)}"
        for key, value in sorted(descriptor.defaults.items())
        if key.startswith("copy.") and key.split(".", 1)[1] in descriptor.skeleton
    )
    return row


def main() -> None:
    parser = argparse.ArgumentParser(description="Export the invoice template catalogue as CSV")
    parser.add_argument("--out", dest="out_csv", type=str, default="out/template_catalog.csv", help="Output CSV")
    args = parser.parse_args()

    csv_path = Path(args.out_csv)
    rows: List[Dict[str, str]] = [_row(descriptor) for descriptor in TEMPLATES.values()]

    csv_path.parent.mkdir(parents=True, exist_ok=True)
    fieldnames = list(rows[0].keys())
    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)

    print(f"OK: wrote {len(rows)} templates -> {csv_path}")


if __name__ == "__main__":
    main()
