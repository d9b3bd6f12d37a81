"""
List the fillable fields of an I-9 PDF template.

Useful when a new form edition renames fields: compare this output with the
names in pdf_filler.build_field_map.

Usage:
    python inspect_pdf_fields.py
    python inspect_pdf_fields.py "path/to/i9-template.pdf"
"""

import sys
from pathlib import Path

from pypdf import PdfReader

from settings import settings


def inspect_fields(path: Path) -> list[tuple[str, str]]:
    """Return (field name, field type) pairs, sorted by name."""
    fields = PdfReader(str(path)).get_fields() or {}
    return sorted((name, str(field.get("/FT", "?"))) for name, field in fields.items())


def main():
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(settings.PDF_TEMPLATE_PATH)
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    fields = inspect_fields(path)
    if not fields:
        print(f"{path.name} has no form fields (flattened template).")
        return

    print(f"{path.name}: {len(fields)} field(s)\n")
    for name, field_type in fields:
        print(f"  {field_type:<6} {name}")


if __name__ == "__main__":
    main()
