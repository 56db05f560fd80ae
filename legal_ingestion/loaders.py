from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from common.logger import get_logger
from legal_ingestion.document_models import DocumentInput, Priority

log = get_logger(__name__)

ALLOWED_EXTS = (".txt", ".md")

_HIGH_PRIORITY_HINTS = ("urgent", "عاجل")
_LOW_PRIORITY_HINTS = ("archive", "أرشيف")


def discover_files(root: Path) -> List[Path]:
    """Recursively find extracted-text files (.txt/.md) under root."""
    paths: List[Path] = []
    for p in Path(root).rglob("*"):
        if p.is_file() and p.suffix.lower() in ALLOWED_EXTS:
            paths.append(p)
    return sorted(paths)


def infer_priority(file_name: str) -> Priority:
    name = file_name.lower()
    if any(h in name for h in _HIGH_PRIORITY_HINTS):
        return Priority.HIGH
    if any(h in name for h in _LOW_PRIORITY_HINTS):
        return Priority.LOW
    return Priority.NORMAL


def load_from_path(path: Path, ocr_confidence: Optional[float] = None) -> Optional[DocumentInput]:
    """Read one extracted-text file; returns None for unsupported files."""
    path = Path(path)
    if path.suffix.lower() not in ALLOWED_EXTS:
        log.warning("Skipping unsupported file: %s", path)
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        # Arabic documents exported from older Windows tools
        text = path.read_text(encoding="cp1256", errors="replace")
    return DocumentInput(
        file_name=path.name,
        content=text,
        ocr_confidence=ocr_confidence,
        priority=infer_priority(path.name),
    )


def load_folder(paths: Iterable[Path]) -> List[DocumentInput]:
    docs: List[DocumentInput] = []
    for p in paths:
        doc = load_from_path(p)
        if doc is not None:
            docs.append(doc)
    return docs
