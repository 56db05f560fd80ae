from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from common.config import ChunkingConfig
from common.logger import get_logger
from legal_ingestion.classifier import classify, get_namespace, validate_required_fields
from legal_ingestion.cleaners import clean_content
from legal_ingestion.dedup import DedupRegistry
from legal_ingestion.document_models import Chunk, ProcessedDocument
from legal_ingestion.errors import DuplicateDocumentError, EmptyDocumentError
from legal_ingestion.extractors import extract_keywords
from legal_ingestion.hash_utils import sha256_text
from legal_ingestion.strategies import get_strategy, segment
from legal_ingestion.validation import validate_metadata

log = get_logger(__name__)


def process_document(
    text: str,
    registry: DedupRegistry,
    ocr_confidence: Optional[float] = None,
    cfg: Optional[ChunkingConfig] = None,
) -> ProcessedDocument:
    """
    Run one document through clean -> dedup -> classify -> segment -> extract.

    - Raises DuplicateDocumentError when the cleaned text's hash is already
      registered; nothing else is done in that case.
    - The hash is added to the registry only once every step has succeeded,
      so a failure leaves the document eligible for a later retry.
    - ocr_confidence is copied into the metadata untouched.
    """
    cleaned = clean_content(text)
    if not cleaned:
        raise EmptyDocumentError("Document is empty after cleaning")

    digest = sha256_text(cleaned)
    if digest in registry:
        raise DuplicateDocumentError(digest)

    classification = classify(cleaned)
    category = classification.category
    namespace = get_namespace(category)
    strategy = get_strategy(category)

    pieces = segment(cleaned, category, cfg)
    if not pieces:
        raise EmptyDocumentError("Segmentation produced no chunks")

    doc_fields = strategy.extract_document_metadata(cleaned)

    chunks: List[Chunk] = []
    for i, piece in enumerate(pieces):
        metadata: Dict[str, Any] = {
            **doc_fields,
            **strategy.extract_chunk_metadata(piece, cleaned),
            "keywords": extract_keywords(piece),
            "chunk_index": i,
            "content_hash": digest,
            "language": "ar",
        }
        if ocr_confidence is not None:
            metadata["ocr_confidence"] = ocr_confidence
        chunks.append(
            Chunk(
                id=f"{category.value}_{digest[:12]}_{i}",
                category=category,
                namespace=namespace,
                content=piece,
                metadata=metadata,
            )
        )

    found: Dict[str, Any] = dict(doc_fields)
    for c in chunks:
        for key, value in c.metadata.items():
            if value and not found.get(key):
                found[key] = value
    _, missing = validate_required_fields(category, found)
    validation_errors = validate_metadata(category, doc_fields)

    metadata: Dict[str, Any] = {
        "type": category.value,
        "namespace": namespace,
        "language": "ar",
        "processing_date": datetime.now(timezone.utc).isoformat(),
        "confidence": classification.confidence,
        "matched_patterns": classification.matched_patterns,
        "total_chunks": len(chunks),
        "keywords": extract_keywords(cleaned),
        **doc_fields,
    }
    if ocr_confidence is not None:
        metadata["ocr_confidence"] = ocr_confidence
    if missing:
        metadata["missing_fields"] = missing
    if validation_errors:
        metadata["validation_errors"] = validation_errors

    notes = [
        f"Document classified as: {category.value}",
        f"Matched patterns: {', '.join(classification.matched_patterns)}",
        f"Confidence: {classification.confidence * 100:.1f}%",
        f"Produced {len(chunks)} chunk(s)",
    ]

    registry.add(digest)
    log.info(
        "Processed document %s as %s (%d chunks, confidence=%.2f)",
        digest[:12],
        category.value,
        len(chunks),
        classification.confidence,
    )
    return ProcessedDocument(
        category=category,
        confidence=classification.confidence,
        chunks=chunks,
        metadata=metadata,
        content_hash=digest,
        notes=notes,
    )
