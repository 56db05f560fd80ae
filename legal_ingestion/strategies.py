from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from common.config import ChunkingConfig, yaml_config
from legal_ingestion.chunkers import SEGMENTERS, Segmenter, finalize_chunks
from legal_ingestion.document_models import DocumentCategory
from legal_ingestion.extractors import (
    CHUNK_EXTRACTORS,
    DOCUMENT_EXTRACTORS,
    ChunkExtractor,
    DocumentExtractor,
)
from legal_ingestion.patterns import CATEGORY_PROFILES


@dataclass(frozen=True)
class CategoryStrategy:
    segment: Segmenter
    extract_document_metadata: DocumentExtractor
    extract_chunk_metadata: ChunkExtractor


STRATEGIES: Dict[DocumentCategory, CategoryStrategy] = {
    category: CategoryStrategy(
        segment=SEGMENTERS[profile.strategy],
        extract_document_metadata=DOCUMENT_EXTRACTORS[category],
        extract_chunk_metadata=CHUNK_EXTRACTORS[category],
    )
    for category, profile in CATEGORY_PROFILES.items()
}


def as_category(category: Union[DocumentCategory, str]) -> DocumentCategory:
    """Unknown tags are treated as 'others'."""
    try:
        return DocumentCategory(category)
    except ValueError:
        return DocumentCategory.OTHERS


def get_strategy(category: Union[DocumentCategory, str]) -> CategoryStrategy:
    return STRATEGIES[as_category(category)]


def segment(
    text: str,
    category: Union[DocumentCategory, str],
    cfg: Optional[ChunkingConfig] = None,
) -> List[str]:
    """
    Split cleaned text into ordered chunks using the category's rules.

    Chunks are trimmed, longer than the minimum chunk size, and fall back to
    sentence packing when the category rules leave nothing.
    """
    cfg = cfg or yaml_config.chunking
    if not text.strip():
        return []
    raw = get_strategy(category).segment(text, cfg)
    return finalize_chunks(text, raw, cfg)
