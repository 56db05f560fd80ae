"""
Static pattern data for classification and segmentation.

Category profiles and structural markers are plain ordered data so a new
category or numbering convention can be added here without touching the
segmentation control flow in chunkers.py.
"""
from __future__ import annotations

import re
from typing import Dict, Pattern, Sequence

from legal_ingestion.document_models import CategoryProfile, DocumentCategory

DIGITS = r"[0-9٠-٩]"

# Insertion order matters: classifier ties resolve to the earliest profile.
CATEGORY_PROFILES: Dict[DocumentCategory, CategoryProfile] = {
    DocumentCategory.LAWS: CategoryProfile(
        identifiers=("قانون", "مادة", "باب", "فصل", "قانون العمل", "قانون الجزاء"),
        structure=("المادة", "الباب", "الفصل", "قانون رقم"),
        namespace="laws",
        required_fields=("law_title", "article_number"),
        strategy="article",
    ),
    DocumentCategory.ROYAL_DECREES: CategoryProfile(
        identifiers=("مرسوم سلطاني", "نحن قابوس", "نحن هيثم", "سلطان عمان", "صدر في"),
        structure=("مرسوم سلطاني رقم", "نحن", "صدر في"),
        namespace="decrees",
        required_fields=("decree_number", "title", "date"),
        strategy="decree_with_attachment",
    ),
    DocumentCategory.REGULATIONS: CategoryProfile(
        identifiers=("اللائحة التنفيذية", "لائحة", "تنظيم", "ضوابط", "إجراءات"),
        structure=("اللائحة التنفيذية لقانون", "المادة", "الأحكام"),
        namespace="regulations",
        required_fields=("regulation_title", "issuing_authority"),
        strategy="article_with_subitems",
    ),
    DocumentCategory.MINISTERIAL_DECISIONS: CategoryProfile(
        identifiers=("قرار وزاري", "الوزير", "قرار رقم", "وزارة"),
        structure=("قرار وزاري رقم", "الوزير", "المادة"),
        namespace="ministerial_decisions",
        required_fields=("decision_number", "ministry", "subject"),
        strategy="article_with_subitems",
    ),
    DocumentCategory.ROYAL_ORDERS: CategoryProfile(
        identifiers=("أمر سام", "أمر سامي", "توجيه سامي", "منح وسام", "تعيين"),
        structure=("أمر سام بـ", "جلالة السلطان", "منح"),
        namespace="royal_orders",
        required_fields=("order_number", "subject", "date"),
        strategy="directive",
    ),
    DocumentCategory.FATWAS: CategoryProfile(
        identifiers=(
            "فتوى",
            "إجابة",
            "استفسار",
            "وزارة العدل والشؤون القانونية",
            "دار الإفتاء",
        ),
        structure=("رقم الفتوى", "السؤال", "الجواب", "الأساس القانوني"),
        namespace="fatwas",
        required_fields=("fatwa_number", "question", "answer"),
        strategy="question_answer",
    ),
    DocumentCategory.JUDICIAL_PRINCIPLES: CategoryProfile(
        identifiers=("مبدأ قضائي", "المحكمة العليا", "مبدأ", "قضية رقم", "مبادئ قضائية"),
        structure=("مبدأ رقم", "قضية رقم", "المحكمة العليا"),
        namespace="judicial_principles",
        required_fields=("principle_number", "case_number", "topic"),
        strategy="principle",
    ),
    DocumentCategory.JUDICIAL_CRIMINAL: CategoryProfile(
        identifiers=("الدائرة الجزائية", "حكم جزائي", "جناية", "جنحة", "عقوبة"),
        structure=("الدائرة الجزائية", "حكم رقم", "التهمة", "العقوبة"),
        namespace="judicial_criminal",
        required_fields=("judgment_number", "charge", "verdict"),
        strategy="principle",
    ),
    DocumentCategory.JUDICIAL_CIVIL: CategoryProfile(
        identifiers=("الدائرة المدنية", "الدائرة التجارية", "حكم مدني", "دعوى مدنية", "عقد"),
        structure=("الدائرة المدنية", "حكم رقم", "الحكم", "المبدأ"),
        namespace="judicial_civil",
        required_fields=("judgment_number", "case_type", "verdict"),
        strategy="principle",
    ),
    DocumentCategory.INDEXES: CategoryProfile(
        identifiers=("فهرس", "دليل", "كشاف", "تصنيف", "فهرس المبادئ"),
        structure=("فهرس", "الرقم", "الموضوع", "الصفحة"),
        namespace="indexes",
        required_fields=("index_title", "year", "items"),
        strategy="paragraph",
    ),
    DocumentCategory.TEMPLATES: CategoryProfile(
        identifiers=("نموذج", "صيغة", "استمارة", "توكيل", "عقد نموذجي"),
        structure=("نموذج رقم", "الصيغة", "التوقيع"),
        namespace="templates",
        required_fields=("template_name", "template_type", "fields"),
        strategy="paragraph",
    ),
    DocumentCategory.OTHERS: CategoryProfile(
        identifiers=("وثيقة", "كتاب", "تقرير", "دراسة"),
        structure=("العنوان", "المحتوى", "التاريخ"),
        namespace="others",
        required_fields=("title", "content_type"),
        strategy="paragraph",
    ),
}

STRATEGY_DESCRIPTIONS: Dict[str, str] = {
    "article": "Each article is an independent chunk; articles are never merged.",
    "decree_with_attachment": (
        "Decree articles first, then the attached agreement or law split on "
        "its own parenthesized article numbering."
    ),
    "article_with_subitems": (
        "Split on article, decision and clause markers; oversized articles are "
        "split again on enumerated sub-items."
    ),
    "directive": "Each directive of the royal order is an independent chunk.",
    "question_answer": (
        "Each fatwa is one chunk holding its question, answer and legal basis."
    ),
    "principle": (
        "Each numbered principle is an independent chunk; unnumbered rulings "
        "are packed by paragraph."
    ),
    "paragraph": "Paragraphs packed up to the generic size limit.",
}


def _alternation(patterns: Sequence[str]) -> str:
    return "|".join(f"(?:{p})" for p in patterns)


def compile_markers(patterns: Sequence[str], flags: int = 0) -> Pattern[str]:
    return re.compile(_alternation(patterns), flags)


ARTICLE_KEYWORDS = ("المادة", "مادة")

ARTICLE_ORDINALS = ("الأولى", "الثانية", "الثالثة")

# "المادة 1", "المادة ١", "المادة الأولى"
ARTICLE_MARKERS = (
    rf"المادة\s+{DIGITS}+",
    rf"المادة\s+(?:{'|'.join(ARTICLE_ORDINALS)})",
)

# "المادة ( ١ )" as used by attached agreements
PARENTHESIZED_ARTICLE_MARKERS = (rf"المادة\s*\(\s*{DIGITS}+\s*\)",)

# First hit of any of these inside a royal decree starts the attached instrument.
ATTACHMENT_MARKERS = (
    r"اتفاقيـ*ة",
    r"قانون",
)

DECISION_MARKERS = (
    *ARTICLE_MARKERS,
    *PARENTHESIZED_ARTICLE_MARKERS,
    rf"قرار\s+(?:وزاري\s+)?رقم\s*{DIGITS}+",
    rf"البند\s*\(?\s*{DIGITS}+",
)

# "١ - ..." / "2) ..." but not dates ("2022-10-24") nor "المادة ( ١ )".
SUB_ITEM_MARKERS = (
    rf"(?:(?<=\s)|^)(?<!\(\s)(?<!{DIGITS}){DIGITS}{{1,3}}\s*[-\)](?!\s*{DIGITS})",
)

FATWA_MARKERS = (
    rf"(?:ال)?فتوى\s+رقم\s*:?\s*{DIGITS}+",
    r"السؤال\s*:",
)

FATWA_NUMBER_MARKER = FATWA_MARKERS[0]

QUESTION_MARKER = "السؤال"
ANSWER_MARKER = "الجواب"
LEGAL_BASIS_MARKER = "الأساس القانوني"
QA_SECTION_MARKERS = (QUESTION_MARKER, ANSWER_MARKER, LEGAL_BASIS_MARKER)

PRINCIPLE_MARKERS = (rf"(?:ال)?مبدأ\s*(?:رقم\s*)?[:(]?\s*{DIGITS}+",)

# Longest first so "نأمر" is not read as "أمر".
DIRECTIVE_MARKERS = (
    r"(?<!\w)نأمر",
    r"(?<!\w)يُ?طلب",
    r"(?<!\w)توجيه",
    r"(?<!\w)أمر",
)

SENTENCE_PATTERN = r"[^.!؟]+[.!؟]*"


ARTICLE_RE = compile_markers(ARTICLE_MARKERS)
PARENTHESIZED_ARTICLE_RE = compile_markers(PARENTHESIZED_ARTICLE_MARKERS)
ATTACHMENT_RE = compile_markers(ATTACHMENT_MARKERS)
DECISION_RE = compile_markers(DECISION_MARKERS)
SUB_ITEM_RE = compile_markers(SUB_ITEM_MARKERS, re.MULTILINE)
FATWA_RE = compile_markers(FATWA_MARKERS)
FATWA_NUMBER_RE = re.compile(FATWA_NUMBER_MARKER)
QA_SECTION_RE = compile_markers(QA_SECTION_MARKERS)
PRINCIPLE_RE = compile_markers(PRINCIPLE_MARKERS)
DIRECTIVE_RE = compile_markers(DIRECTIVE_MARKERS)
