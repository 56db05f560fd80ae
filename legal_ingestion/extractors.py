"""
Regex metadata extractors, one document-level and one chunk-level function
per category.

Every extractor is a pure function of its input text and returns only the
fields it found: a miss leaves the key out instead of writing a placeholder.
The only defaults are the fixed issuing authorities of royal orders and fatwas.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, List

from legal_ingestion.chunkers import find_attachment_start
from legal_ingestion.document_models import DocumentCategory
from legal_ingestion.patterns import (
    ARTICLE_ORDINALS,
    CATEGORY_PROFILES,
    DIGITS,
    DIRECTIVE_RE,
)

Metadata = Dict[str, Any]
DocumentExtractor = Callable[[str], Metadata]
ChunkExtractor = Callable[[str, str], Metadata]

ROYAL_ORDER_AUTHORITY = "جلالة السلطان"
FATWA_AUTHORITY = "وزارة العدل والشؤون القانونية"

_NUMBER = rf"{DIGITS}+(?:/{DIGITS}+)*"

DATE_RE = re.compile(
    rf"{DIGITS}{{4}}-{DIGITS}{{1,2}}-{DIGITS}{{1,2}}|{DIGITS}{{1,2}}/{DIGITS}{{1,2}}/{DIGITS}{{4}}"
)
HIJRI_ISSUE_RE = re.compile(r"صدر في\s+(.+?(?:هـ|م))(?=[\s،,]|$)")
YEAR_RE = re.compile(r"(?<![0-9٠-٩])((?:19|20|13|14)[0-9]{2}|(?:١٩|٢٠|١٣|١٤)[٠-٩]{2})(?![0-9٠-٩])")

ARTICLE_NUMBER_RE = re.compile(
    rf"\s*المادة\s*\(?\s*({DIGITS}+|{'|'.join(ARTICLE_ORDINALS)})"
)
SECTION_RE = re.compile(r"(?:الباب|الفصل)\s+[^\n:]+")
PRINCIPLE_NUMBER_RE = re.compile(rf"\s*(?:ال)?مبدأ\s*(?:رقم\s*)?[:(]?\s*({DIGITS}+)")

CITATION_RE = re.compile(
    rf"المادت(?:ين|ان)\s+{DIGITS}+\s+و\s*{DIGITS}+"
    rf"|المادة\s*\(?\s*{DIGITS}+\s*\)?"
    r"|اللائحة التنفيذية(?:\s+ل\S+(?:\s+\S+){0,2})?"
    r"|قانون\s+[^\s،,.]+(?:\s+[^\s،,.]+)?"
)

LAW_TITLE_RE = re.compile(r"قانون\s+([^\n:.،]{2,120})")
DECREE_REFERENCE_RE = re.compile(rf"مرسوم\s+سلطاني\s+رقم\s*({_NUMBER})")
DECREE_TITLE_RE = re.compile(rf"مرسوم\s+سلطاني\s+رقم\s*{_NUMBER}\s+(ب[^\n]{{2,200}}?)(?=\s+نحن\s|\n|$)")
SOVEREIGN_RE = re.compile(r"نحن\s+(\S+\s+بن\s+\S+)")

REGULATION_TITLE_RE = re.compile(r"((?:اللائحة التنفيذية لقانون|لائحة)[^\n.:،]{0,120})")
AUTHORITY_RE = re.compile(r"((?:وزارة|هيئة|جهاز|مجلس|ديوان)\s+\S+(?:\s+و\S+)?)")
MINISTRY_RE = re.compile(r"(وزارة\s+\S+(?:\s+و\S+)?)")
MINISTER_RE = re.compile(r"(وزير\s+\S+(?:\s+و\S+)?)")
DECISION_NUMBER_RE = re.compile(rf"قرار\s+(?:وزاري\s+)?رقم\s*({_NUMBER})")
SUBJECT_RE = re.compile(r"بشأن\s+([^\n.:]{2,200})")

ORDER_NUMBER_RE = re.compile(rf"أمر\s+سامي?\s+رقم\s*({_NUMBER})")
ORDER_SUBJECT_RE = re.compile(rf"أمر\s+سامي?\s+(?:رقم\s*{_NUMBER}\s+)?(ب[^\n.]{{2,200}})")
RECIPIENT_RE = re.compile(r"(?:منح|تعيين)\s+([^\n.،]{2,120})")

FATWA_NUMBER_RE = re.compile(rf"(?:(?:ال)?فتوى\s+رقم|رقم الفتوى)\s*:?\s*({_NUMBER})")
TOPIC_RE = re.compile(r"الموضوع\s*:\s*([^\n]+)")
QUESTION_RE = re.compile(r"السؤال\s*:?\s*(.+?)(?=الجواب|$)", re.DOTALL)
ANSWER_RE = re.compile(r"الجواب\s*:?\s*(.+?)(?=الأساس القانوني|السؤال|$)", re.DOTALL)
LEGAL_BASIS_RE = re.compile(r"الأساس القانوني\s*:?\s*(.+?)(?=السؤال|$)", re.DOTALL)

CASE_NUMBER_RE = re.compile(rf"(?:القضية|قضية|الطعن)\s+رقم\s*:?\s*({_NUMBER})")
JUDGMENT_NUMBER_RE = re.compile(rf"حكم\s+رقم\s*:?\s*({_NUMBER})")
COURT_RE = re.compile(r"(المحكمة\s+العليا|محكمة\s+\S+(?:\s+\S+)?)")
CIRCUIT_RE = re.compile(r"(الدائرة\s+\S+)")
CHARGE_RE = re.compile(r"التهمة\s*:?\s*([^\n]+)")
VERDICT_RES = (
    re.compile(r"(?:منطوق الحكم|الحكم)\s*:\s*([^\n]+)"),
    re.compile(r"حكمت المحكمة\s+([^\n]+)"),
)
PARTY_RE = re.compile(
    r"(المدعى عليها|المدعى عليه|المدعية|المدعي|المطعون ضده|الطاعن|المتهم)\s*:\s*([^\n]+)"
)
CASE_TYPE_RES = (
    re.compile(r"الدائرة\s+(المدنية|التجارية|العمالية|الإدارية|الشرعية)"),
    re.compile(r"دعوى\s+(مدنية|تجارية|عمالية|إيجارية|إدارية)"),
)

INDEX_ITEM_RE = re.compile(rf"^\s*{DIGITS}+\s*[-.)]\s*(.+)$", re.MULTILINE)
TEMPLATE_NAME_RE = re.compile(r"(نموذج\s+[^\n.:]{2,120})")
TEMPLATE_TYPES = ("توكيل", "عقد", "استمارة", "إقرار", "طلب", "صيغة")
TEMPLATE_FIELD_RE = re.compile(r"([\u0600-\u06FF][\u0600-\u06FF ]{1,30}?)\s*:\s*(?:\.{3,}|…+|_{3,})")

ARABIC_TOKEN_RE = re.compile(r"[\u0600-\u06FF]+")

MAX_KEYWORDS = 10
MAX_INDEX_ITEMS = 100


# --------------------
# Helpers
# --------------------
def _first(pattern: re.Pattern, text: str, group: int = 1) -> str:
    m = pattern.search(text)
    return m.group(group).strip() if m else ""


def _unique(values: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for v in values:
        v = v.strip()
        if v:
            seen.setdefault(v, None)
    return list(seen)


def _compact(fields: Metadata) -> Metadata:
    return {k: v for k, v in fields.items() if v not in ("", None, [], {})}


def _first_line(text: str, containing: Iterable[str] = ()) -> str:
    needles = tuple(containing)
    for line in text.split("\n"):
        line = line.strip()
        if line and (not needles or any(n in line for n in needles)):
            return line[:150]
    return ""


def _position(chunk: str, document: str) -> int:
    return document.find(chunk[:200])


def extract_date(text: str) -> str:
    """First ISO (YYYY-MM-DD) or D/M/YYYY date, Latin or Arabic-Indic digits."""
    m = DATE_RE.search(text)
    return m.group(0) if m else ""


def extract_legal_basis(text: str) -> List[str]:
    return _unique(m.group(0) for m in CITATION_RE.finditer(text))


def extract_keywords(text: str) -> List[str]:
    """Distinct Arabic-script tokens longer than two letters, first ten kept."""
    words = (w for w in ARABIC_TOKEN_RE.findall(text) if len(w) > 2)
    return _unique(words)[:MAX_KEYWORDS]


def _article_number(chunk: str) -> str:
    m = ARTICLE_NUMBER_RE.match(chunk)
    return m.group(1) if m else ""


def _principle_number(chunk: str) -> str:
    m = PRINCIPLE_NUMBER_RE.match(chunk)
    return m.group(1) if m else ""


def _parties(text: str) -> List[str]:
    return _unique(f"{role}: {name.strip()}" for role, name in PARTY_RE.findall(text))


def _verdict(text: str) -> str:
    for pattern in VERDICT_RES:
        found = _first(pattern, text)
        if found:
            return found
    return ""


# --------------------
# Laws / decrees / regulations
# --------------------
def extract_law_document(text: str) -> Metadata:
    reference = _first(DECREE_REFERENCE_RE, text)
    return _compact(
        {
            "law_title": _first(LAW_TITLE_RE, text),
            "law_reference": f"مرسوم سلطاني رقم {reference}" if reference else "",
            "date": extract_date(text),
        }
    )


def extract_law_chunk(chunk: str, document: str) -> Metadata:
    section = ""
    pos = _position(chunk, document)
    if pos >= 0:
        headings = SECTION_RE.findall(document[:pos])
        section = headings[-1].strip() if headings else ""
    return _compact({"article_number": _article_number(chunk), "section": section})


def extract_decree_document(text: str) -> Metadata:
    issued_on = extract_date(text) or _first(HIJRI_ISSUE_RE, text)
    sovereign = _first(SOVEREIGN_RE, text)
    return _compact(
        {
            "decree_number": _first(DECREE_REFERENCE_RE, text),
            "title": _first(DECREE_TITLE_RE, text),
            "issued_by": f"{sovereign} سلطان عمان" if sovereign else "",
            "date": issued_on,
        }
    )


def extract_decree_chunk(chunk: str, document: str) -> Metadata:
    split_at = find_attachment_start(document)
    pos = _position(chunk, document)
    part = "attachment" if 0 <= split_at <= pos else "decree"
    return _compact({"article_number": _article_number(chunk), "part": part})


def extract_regulation_document(text: str) -> Metadata:
    return _compact(
        {
            "regulation_title": _first(REGULATION_TITLE_RE, text),
            "issuing_authority": _first(AUTHORITY_RE, text),
            "date": extract_date(text),
        }
    )


def extract_article_chunk(chunk: str, document: str) -> Metadata:
    return _compact({"article_number": _article_number(chunk)})


def extract_decision_document(text: str) -> Metadata:
    return _compact(
        {
            "decision_number": _first(DECISION_NUMBER_RE, text),
            "ministry": _first(MINISTRY_RE, text) or _first(MINISTER_RE, text),
            "subject": _first(SUBJECT_RE, text),
            "date": extract_date(text),
        }
    )


# --------------------
# Royal orders
# --------------------
def extract_royal_order_document(text: str) -> Metadata:
    sovereign = _first(SOVEREIGN_RE, text)
    fields = _compact(
        {
            "order_number": _first(ORDER_NUMBER_RE, text),
            "subject": _first(ORDER_SUBJECT_RE, text),
            "recipient": _first(RECIPIENT_RE, text),
            "date": extract_date(text),
        }
    )
    fields["issued_by"] = f"{sovereign} سلطان عمان" if sovereign else ROYAL_ORDER_AUTHORITY
    return fields


def extract_royal_order_chunk(chunk: str, document: str) -> Metadata:
    m = DIRECTIVE_RE.match(chunk)
    return _compact({"directive": m.group(0) if m else ""})


# --------------------
# Fatwas
# --------------------
def _qa_fields(text: str) -> Metadata:
    basis_section = _first(LEGAL_BASIS_RE, text)
    return {
        "question": _first(QUESTION_RE, text),
        "answer": _first(ANSWER_RE, text),
        "legal_basis": extract_legal_basis(basis_section or text),
    }


def extract_fatwa_document(text: str) -> Metadata:
    fields = _compact(
        {
            "fatwa_number": _first(FATWA_NUMBER_RE, text),
            "title": _first(TOPIC_RE, text) or _first_line(text, ("الإجازة", "الشهادة")),
            "date": extract_date(text),
            **_qa_fields(text),
        }
    )
    fields["issued_by"] = FATWA_AUTHORITY
    return fields


def extract_fatwa_chunk(chunk: str, document: str) -> Metadata:
    return _compact(_qa_fields(chunk))


# --------------------
# Judgments and principles
# --------------------
def extract_principles_document(text: str) -> Metadata:
    return _compact(
        {
            "case_number": _first(CASE_NUMBER_RE, text),
            "court": _first(COURT_RE, text),
            "topic": _first(TOPIC_RE, text),
            "date": extract_date(text),
        }
    )


def extract_principle_chunk(chunk: str, document: str) -> Metadata:
    return _compact(
        {
            "principle_number": _principle_number(chunk),
            "legal_basis": extract_legal_basis(chunk),
        }
    )


def _judgment_fields(text: str) -> Metadata:
    return {
        "judgment_number": _first(JUDGMENT_NUMBER_RE, text) or _first(CASE_NUMBER_RE, text),
        "court": _first(COURT_RE, text),
        "circuit": _first(CIRCUIT_RE, text),
        "verdict": _verdict(text),
        "parties": _parties(text),
        "date": extract_date(text),
    }


def extract_criminal_document(text: str) -> Metadata:
    return _compact({**_judgment_fields(text), "charge": _first(CHARGE_RE, text)})


def extract_civil_document(text: str) -> Metadata:
    case_type = ""
    for pattern in CASE_TYPE_RES:
        case_type = _first(pattern, text)
        if case_type:
            break
    return _compact({**_judgment_fields(text), "case_type": case_type})


# --------------------
# Indexes, templates, others
# --------------------
def extract_index_document(text: str) -> Metadata:
    items = [m.group(1).strip() for m in INDEX_ITEM_RE.finditer(text)][:MAX_INDEX_ITEMS]
    return _compact(
        {
            "index_title": _first_line(text, ("فهرس", "دليل", "كشاف")),
            "year": _first(YEAR_RE, text),
            "items": items,
        }
    )


def extract_template_document(text: str) -> Metadata:
    template_type = next((t for t in TEMPLATE_TYPES if t in text), "")
    return _compact(
        {
            "template_name": _first(TEMPLATE_NAME_RE, text),
            "template_type": template_type,
            "fields": _unique(TEMPLATE_FIELD_RE.findall(text)),
        }
    )


def extract_generic_document(text: str) -> Metadata:
    identifiers = CATEGORY_PROFILES[DocumentCategory.OTHERS].identifiers
    return _compact(
        {
            "title": _first_line(text),
            "content_type": next((i for i in identifiers if i in text), ""),
            "date": extract_date(text),
        }
    )


def extract_no_chunk_fields(chunk: str, document: str) -> Metadata:
    return {}


DOCUMENT_EXTRACTORS: Dict[DocumentCategory, DocumentExtractor] = {
    DocumentCategory.LAWS: extract_law_document,
    DocumentCategory.ROYAL_DECREES: extract_decree_document,
    DocumentCategory.REGULATIONS: extract_regulation_document,
    DocumentCategory.MINISTERIAL_DECISIONS: extract_decision_document,
    DocumentCategory.ROYAL_ORDERS: extract_royal_order_document,
    DocumentCategory.FATWAS: extract_fatwa_document,
    DocumentCategory.JUDICIAL_PRINCIPLES: extract_principles_document,
    DocumentCategory.JUDICIAL_CRIMINAL: extract_criminal_document,
    DocumentCategory.JUDICIAL_CIVIL: extract_civil_document,
    DocumentCategory.INDEXES: extract_index_document,
    DocumentCategory.TEMPLATES: extract_template_document,
    DocumentCategory.OTHERS: extract_generic_document,
}

CHUNK_EXTRACTORS: Dict[DocumentCategory, ChunkExtractor] = {
    DocumentCategory.LAWS: extract_law_chunk,
    DocumentCategory.ROYAL_DECREES: extract_decree_chunk,
    DocumentCategory.REGULATIONS: extract_article_chunk,
    DocumentCategory.MINISTERIAL_DECISIONS: extract_article_chunk,
    DocumentCategory.ROYAL_ORDERS: extract_royal_order_chunk,
    DocumentCategory.FATWAS: extract_fatwa_chunk,
    DocumentCategory.JUDICIAL_PRINCIPLES: extract_principle_chunk,
    DocumentCategory.JUDICIAL_CRIMINAL: extract_principle_chunk,
    DocumentCategory.JUDICIAL_CIVIL: extract_principle_chunk,
    DocumentCategory.INDEXES: extract_no_chunk_fields,
    DocumentCategory.TEMPLATES: extract_no_chunk_fields,
    DocumentCategory.OTHERS: extract_no_chunk_fields,
}
