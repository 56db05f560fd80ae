from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from common.config import yaml_config
from common.logger import get_logger
from legal_ingestion.document_models import ClassificationResult, DocumentCategory
from legal_ingestion.patterns import CATEGORY_PROFILES, STRATEGY_DESCRIPTIONS
from legal_ingestion.tables import extract_tables

log = get_logger(__name__)

_MAX_POSSIBLE_SCORE = max(p.max_score for p in CATEGORY_PROFILES.values())


def classify(text: str) -> ClassificationResult:
    """
    Score cleaned text against every category profile.

    Each strong identifier present in the text adds 1.0 and each structural
    marker adds 0.5 (presence, not count). The best score wins; ties keep the
    earlier profile. Confidence is relative to the richest profile, so a
    perfect match on a small profile is still below 1.0.
    """
    if not text:
        return ClassificationResult(DocumentCategory.OTHERS, 0.0, [])

    best_category = DocumentCategory.OTHERS
    best_score = 0.0
    best_patterns: List[str] = []

    for category, profile in CATEGORY_PROFILES.items():
        score = 0.0
        patterns: List[str] = []
        for identifier in profile.identifiers:
            if identifier in text:
                score += 1.0
                patterns.append(identifier)
        for marker in profile.structure:
            if marker in text:
                score += 0.5
                patterns.append(marker)
        # strict ">" keeps the first profile on ties
        if score > best_score:
            best_category, best_score, best_patterns = category, score, patterns

    confidence = min(max(best_score / _MAX_POSSIBLE_SCORE, 0.0), 1.0)
    log.debug("Classified as %s (score=%.1f, confidence=%.2f)", best_category.value, best_score, confidence)
    return ClassificationResult(best_category, confidence, best_patterns)


def get_namespace(category: DocumentCategory) -> str:
    profile = CATEGORY_PROFILES.get(category)
    return profile.namespace if profile else DocumentCategory.OTHERS.value


def chunking_strategy_description(category: DocumentCategory) -> str:
    profile = CATEGORY_PROFILES.get(category, CATEGORY_PROFILES[DocumentCategory.OTHERS])
    return STRATEGY_DESCRIPTIONS[profile.strategy]


def validate_required_fields(
    category: DocumentCategory, metadata: Dict[str, Any]
) -> Tuple[bool, List[str]]:
    """Return (is_valid, missing_fields) for the category's required fields."""
    profile = CATEGORY_PROFILES.get(category)
    if profile is None:
        return False, ["invalid document type"]
    missing = [f for f in profile.required_fields if not metadata.get(f)]
    return not missing, missing


def review_classification(
    text: str, expected: Optional[DocumentCategory] = None
) -> Dict[str, Any]:
    """
    Classify and collect reviewer-facing warnings and recommendations.
    """
    result = classify(text)
    warnings: List[str] = []
    recommendations: List[str] = []

    tables = extract_tables(text)
    if tables:
        recommendations.append(
            f"Detected {len(tables)} table(s) in the document. Consider structured extraction."
        )
    if result.confidence < yaml_config.classification.low_confidence_threshold:
        warnings.append("Low confidence classification - manual review recommended")
    if expected is not None and result.category != expected:
        warnings.append(
            f"Classification mismatch: predicted {result.category.value}, expected {expected.value}"
        )

    recommendations.append(f"Chunking strategy: {chunking_strategy_description(result.category)}")
    recommendations.append(f"Use namespace: {get_namespace(result.category)}")
    return {
        "classification": result,
        "warnings": warnings,
        "recommendations": recommendations,
        "tables": tables,
    }
