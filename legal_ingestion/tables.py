from __future__ import annotations

import re
from typing import Dict, List

# Consecutive lines that start and end with "|"
_TABLE_RE = re.compile(r"(?:^\|.*\|[ \t]*$\n?)+", re.MULTILINE)


def parse_arabic_table(table: str) -> List[Dict[str, str]]:
    """
    Parse a markdown-style table into row dicts keyed by the header cells.

    The second line is taken to be the "| --- |" separator and skipped.
    Missing trailing cells become empty strings.
    """
    lines = [
        line.strip()
        for line in table.split("\n")
        if line.strip().startswith("|") and line.strip().endswith("|")
    ]
    if len(lines) < 2:
        return []
    headers = [h.strip() for h in lines[0].split("|") if h.strip()]
    rows: List[Dict[str, str]] = []
    for line in lines[2:]:
        cells = [c.strip() for c in line.split("|") if c.strip()]
        rows.append({h: cells[i] if i < len(cells) else "" for i, h in enumerate(headers)})
    return rows


def extract_tables(text: str) -> List[Dict[str, object]]:
    return [{"raw": m.group(0), "rows": parse_arabic_table(m.group(0))} for m in _TABLE_RE.finditer(text)]
