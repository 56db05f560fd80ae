import pytest

from legal_ingestion.classifier import (
    chunking_strategy_description,
    classify,
    get_namespace,
    review_classification,
    validate_required_fields,
)
from legal_ingestion.document_models import DocumentCategory
from legal_ingestion.patterns import CATEGORY_PROFILES, STRATEGY_DESCRIPTIONS

MAX_SCORE = max(p.max_score for p in CATEGORY_PROFILES.values())


def test_empty_text_is_others_with_zero_confidence():
    result = classify("")
    assert result.category == DocumentCategory.OTHERS
    assert result.confidence == 0.0
    assert result.matched_patterns == []


def test_no_match_falls_back_to_others():
    result = classify("lorem ipsum dolor sit amet")
    assert result.category == DocumentCategory.OTHERS
    assert result.confidence == 0.0


def test_single_identifier_scores_one_point():
    result = classify("مرسوم سلطاني")
    assert result.category == DocumentCategory.ROYAL_DECREES
    assert result.matched_patterns == ["مرسوم سلطاني"]
    assert result.confidence == pytest.approx(1.0 / MAX_SCORE)


def test_ties_go_to_the_earlier_profile():
    # one laws identifier vs one royal_orders identifier
    result = classify("فصل تعيين")
    assert result.category == DocumentCategory.LAWS


def test_law_text_is_classified_as_law(law_text):
    result = classify(law_text)
    assert result.category == DocumentCategory.LAWS
    assert "قانون العمل" in result.matched_patterns
    assert 0.0 < result.confidence <= 1.0


def test_confidence_is_clamped_to_unit_interval():
    everything = " ".join(
        s for p in CATEGORY_PROFILES.values() for s in (*p.identifiers, *p.structure)
    )
    assert 0.0 <= classify(everything).confidence <= 1.0


def test_namespaces_and_strategy_descriptions():
    assert get_namespace(DocumentCategory.ROYAL_DECREES) == "decrees"
    assert get_namespace(DocumentCategory.FATWAS) == "fatwas"
    assert (
        chunking_strategy_description(DocumentCategory.LAWS)
        == STRATEGY_DESCRIPTIONS["article"]
    )


def test_validate_required_fields_reports_missing():
    ok, missing = validate_required_fields(DocumentCategory.LAWS, {"law_title": "العمل"})
    assert not ok
    assert missing == ["article_number"]

    ok, missing = validate_required_fields(
        DocumentCategory.LAWS, {"law_title": "العمل", "article_number": "1"}
    )
    assert ok and missing == []


def test_review_flags_low_confidence_and_mismatch():
    review = review_classification("نص عادي", expected=DocumentCategory.FATWAS)
    assert review["classification"].category == DocumentCategory.OTHERS
    assert any("Low confidence" in w for w in review["warnings"])
    assert any("mismatch" in w for w in review["warnings"])
    assert any(r.startswith("Use namespace: others") for r in review["recommendations"])


def test_review_detects_tables():
    text = "فهرس المبادئ\n| الرقم | الموضوع |\n| --- | --- |\n| 1 | العمل |\n"
    review = review_classification(text)
    assert len(review["tables"]) == 1
    assert review["tables"][0]["rows"] == [{"الرقم": "1", "الموضوع": "العمل"}]
