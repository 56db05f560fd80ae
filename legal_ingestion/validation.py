from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from legal_ingestion.document_models import DocumentCategory


@dataclass(frozen=True)
class ValidationRule:
    field: str
    required: bool = False
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None


_NUMBER_PATTERN = r"^[0-9٠-٩]+(?:/[0-9٠-٩]+)*$"

VALIDATION_RULES: Dict[DocumentCategory, Tuple[ValidationRule, ...]] = {
    DocumentCategory.LAWS: (ValidationRule("law_title", required=True, min_length=5),),
    DocumentCategory.ROYAL_DECREES: (
        ValidationRule("decree_number", required=True, pattern=r"^[0-9٠-٩]+/[0-9٠-٩]+$"),
        ValidationRule("date", required=True),
    ),
    DocumentCategory.REGULATIONS: (
        ValidationRule("regulation_title", required=True, min_length=5),
    ),
    DocumentCategory.MINISTERIAL_DECISIONS: (
        ValidationRule("decision_number", required=True, pattern=_NUMBER_PATTERN),
        ValidationRule("ministry", required=True),
    ),
    DocumentCategory.ROYAL_ORDERS: (
        ValidationRule("order_number", required=True),
        ValidationRule("subject", required=True),
    ),
    DocumentCategory.FATWAS: (
        ValidationRule("question", required=True, min_length=10),
        ValidationRule("answer", required=True, min_length=10),
    ),
    DocumentCategory.JUDICIAL_PRINCIPLES: (
        ValidationRule("case_number", required=True),
        ValidationRule("court", required=True),
    ),
    DocumentCategory.JUDICIAL_CRIMINAL: (
        ValidationRule("judgment_number", required=True),
        ValidationRule("charge", required=True),
    ),
    DocumentCategory.JUDICIAL_CIVIL: (
        ValidationRule("judgment_number", required=True),
        ValidationRule("case_type", required=True),
    ),
    DocumentCategory.INDEXES: (ValidationRule("index_title", required=True),),
    DocumentCategory.TEMPLATES: (
        ValidationRule("template_name", required=True),
        ValidationRule("template_type", required=True),
    ),
    DocumentCategory.OTHERS: (ValidationRule("title"),),
}


def validate_metadata(category: DocumentCategory, metadata: Dict[str, Any]) -> List[str]:
    """Check extracted metadata against the category's rules; returns error messages."""
    errors: List[str] = []
    for rule in VALIDATION_RULES.get(category, ()):
        value = metadata.get(rule.field)
        present = bool(value.strip()) if isinstance(value, str) else bool(value)
        if not present:
            if rule.required:
                errors.append(f"field '{rule.field}' is required")
            continue
        text = value if isinstance(value, str) else str(value)
        if rule.min_length is not None and len(text) < rule.min_length:
            errors.append(f"field '{rule.field}' is shorter than {rule.min_length} characters")
        if rule.max_length is not None and len(text) > rule.max_length:
            errors.append(f"field '{rule.field}' is longer than {rule.max_length} characters")
        if rule.pattern and not re.search(rule.pattern, text):
            errors.append(f"field '{rule.field}' does not match the expected format")
    return errors
