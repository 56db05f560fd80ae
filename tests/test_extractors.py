from legal_ingestion.document_models import DocumentCategory
from legal_ingestion.extractors import (
    FATWA_AUTHORITY,
    ROYAL_ORDER_AUTHORITY,
    extract_criminal_document,
    extract_date,
    extract_decree_chunk,
    extract_decree_document,
    extract_fatwa_chunk,
    extract_fatwa_document,
    extract_keywords,
    extract_law_chunk,
    extract_law_document,
    extract_legal_basis,
    extract_royal_order_document,
    extract_template_document,
)
from legal_ingestion.strategies import segment


def test_extract_date_latin_and_arabic_digits():
    assert extract_date("صدر في 2020-03-15 بمسقط") == "2020-03-15"
    assert extract_date("بتاريخ ١٥/٣/٢٠٢٠") == "١٥/٣/٢٠٢٠"
    assert extract_date("بدون تاريخ") == ""


def test_keywords_are_unique_ordered_and_capped():
    assert extract_keywords("في من قانون العمل قانون") == ["قانون", "العمل"]
    many = " ".join(f"كلمة{chr(0x0628 + i)}" for i in range(15))
    assert len(extract_keywords(many)) == 10


def test_legal_basis_collects_citations():
    refs = extract_legal_basis("استنادا إلى المادة 61 من قانون العمل، والمادة ( 4 ) منه")
    assert "المادة 61" in refs
    assert "قانون العمل" in refs
    assert any(r.startswith("المادة ( 4") for r in refs)


def test_missing_fields_are_omitted():
    assert extract_law_document("نص بلا بيانات واضحة") == {}


def test_law_fields(law_text):
    fields = extract_law_document(law_text)
    assert fields["law_title"] == "العمل"
    assert "law_reference" not in fields


def test_law_chunk_carries_article_and_section():
    text = (
        "الباب الأول: أحكام عامة\n"
        "المادة 1: يسري هذا القانون على جميع العاملين في القطاع الخاص."
    )
    chunk = segment(text, DocumentCategory.LAWS)[0]
    assert extract_law_chunk(chunk, text) == {"article_number": "1", "section": "الباب الأول"}


def test_decree_fields(decree_text):
    fields = extract_decree_document(decree_text)
    assert fields["decree_number"] == "12/2020"
    assert fields["title"] == "بالتصديق على الاتفاق الثنائي"
    assert fields["issued_by"] == "هيثم بن طارق سلطان عمان"
    assert fields["date"] == "2020-03-15"


def test_decree_chunks_know_their_part(decree_text):
    chunks = segment(decree_text, DocumentCategory.ROYAL_DECREES)
    parts = [extract_decree_chunk(c, decree_text)["part"] for c in chunks]
    assert parts == ["decree", "decree", "decree", "attachment", "attachment"]
    assert extract_decree_chunk(chunks[1], decree_text)["article_number"] == "الأولى"
    assert extract_decree_chunk(chunks[3], decree_text)["article_number"] == "1"


def test_royal_order_defaults_issuer():
    fields = extract_royal_order_document("أمر سام رقم 3/2022 بتعيين مدير عام للهيئة")
    assert fields["order_number"] == "3/2022"
    assert fields["subject"] == "بتعيين مدير عام للهيئة"
    assert fields["issued_by"] == ROYAL_ORDER_AUTHORITY


def test_fatwa_fields(fatwa_text):
    fields = extract_fatwa_document(fatwa_text)
    assert fields["issued_by"] == FATWA_AUTHORITY
    assert fields["question"].startswith("ما حكم إجازة الموظف")
    assert fields["answer"].startswith("يستحق الموظف")
    assert "قانون العمل" in fields["legal_basis"]

    chunk_fields = extract_fatwa_chunk(fatwa_text, fatwa_text)
    assert set(chunk_fields) == {"question", "answer", "legal_basis"}


def test_criminal_judgment_fields():
    text = (
        "حكم رقم 45/2019\n"
        "الدائرة الجزائية\n"
        "التهمة: السرقة\n"
        "المتهم: سالم\n"
        "الحكم: إدانة المتهم بالتهمة المنسوبة إليه"
    )
    fields = extract_criminal_document(text)
    assert fields["judgment_number"] == "45/2019"
    assert fields["circuit"] == "الدائرة الجزائية"
    assert fields["charge"] == "السرقة"
    assert fields["verdict"] == "إدانة المتهم بالتهمة المنسوبة إليه"
    assert fields["parties"] == ["المتهم: سالم"]


def test_template_fields():
    text = "نموذج توكيل خاص\nاسم الموكل: ........\nاسم الوكيل: ........"
    fields = extract_template_document(text)
    assert fields["template_name"] == "نموذج توكيل خاص"
    assert fields["template_type"] == "توكيل"
    assert fields["fields"] == ["اسم الموكل", "اسم الوكيل"]
