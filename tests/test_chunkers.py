from common.config import ChunkingConfig
from legal_ingestion.chunkers import find_attachment_start, split_before
from legal_ingestion.document_models import DocumentCategory
from legal_ingestion.extractors import extract_article_chunk
from legal_ingestion.patterns import ARTICLE_RE
from legal_ingestion.strategies import STRATEGIES, segment


def _assert_ordered_and_disjoint(text, chunks):
    cursor = 0
    for chunk in chunks:
        pos = text.find(chunk, cursor)
        assert pos >= cursor, f"chunk out of order: {chunk[:40]!r}"
        cursor = pos + len(chunk)


def test_every_category_has_a_strategy():
    assert set(STRATEGIES) == set(DocumentCategory)


def test_split_before_keeps_preamble_and_fragments():
    preamble, fragments = split_before("مقدمة المادة 1 أ المادة 2 ب", ARTICLE_RE)
    assert preamble == "مقدمة "
    assert fragments == ["المادة 1 أ ", "المادة 2 ب"]


def test_split_before_without_match_returns_whole_text():
    assert split_before("لا شيء هنا", ARTICLE_RE) == ("لا شيء هنا", [])


def test_law_produces_one_chunk_per_article(law_text):
    chunks = segment(law_text, DocumentCategory.LAWS)
    assert len(chunks) == 3
    assert all(c.startswith("المادة") for c in chunks)
    _assert_ordered_and_disjoint(law_text, chunks)


def test_two_article_law_gives_two_chunks():
    text = (
        "المادة 1: نص أ يحدد نطاق تطبيق أحكام هذا النظام. "
        "المادة 2: نص ب يحدد الجهة المختصة بتنفيذ هذه الأحكام."
    )
    chunks = segment(text, "laws")
    assert len(chunks) == 2
    assert chunks[0].startswith("المادة 1")
    assert chunks[1].startswith("المادة 2")


def test_law_articles_with_arabic_digits_and_ordinals():
    text = (
        "المادة الأولى: يعمل بأحكام هذا النظام اعتبارا من تاريخ نشره.\n"
        "المادة ٢: تلغى جميع الأحكام السابقة المخالفة لهذا النظام."
    )
    chunks = segment(text, DocumentCategory.LAWS)
    assert [c.split(":")[0] for c in chunks] == ["المادة الأولى", "المادة ٢"]


def test_long_law_preamble_is_kept():
    preamble = "تمهيد " * 50
    text = preamble + "\nالمادة 1: يسري هذا النظام على جميع الجهات الحكومية."
    chunks = segment(text, DocumentCategory.LAWS)
    assert len(chunks) == 2
    assert chunks[0] == preamble.strip()


def test_royal_decree_chunks_precede_attachment_chunks(decree_text):
    chunks = segment(decree_text, DocumentCategory.ROYAL_DECREES)
    assert len(chunks) == 5
    assert chunks[0].startswith("مرسوم سلطاني رقم")
    assert chunks[1].startswith("المادة الأولى")
    assert chunks[2].startswith("المادة الثانية")
    assert chunks[3].startswith("المادة ( 1 )")
    assert chunks[4].startswith("المادة ( 2 )")
    _assert_ordered_and_disjoint(decree_text, chunks)


def test_attachment_start_ignores_marker_at_offset_zero():
    assert find_attachment_start("قانون تنظيم العمل") == -1
    assert find_attachment_start("نص المرسوم ثم اتفاقيـــة التعاون") > 0


def test_question_and_answer_stay_in_one_chunk(fatwa_text):
    chunks = segment(fatwa_text, DocumentCategory.FATWAS)
    assert len(chunks) == 1
    assert "السؤال" in chunks[0] and "الجواب" in chunks[0]


def test_numbered_fatwas_keep_their_header():
    text = (
        "فتوى رقم 15\n"
        "السؤال: هل يجوز تجديد عقد العمل محدد المدة تلقائيا؟ "
        "الجواب: نعم يجوز ذلك ما لم يتفق الطرفان على خلافه.\n"
        "فتوى رقم 16\n"
        "السؤال: هل تحتسب أيام العطل الرسمية من الإجازة السنوية؟ "
        "الجواب: لا تحتسب أيام العطل الرسمية من الإجازة."
    )
    chunks = segment(text, DocumentCategory.FATWAS)
    assert len(chunks) == 2
    assert chunks[0].startswith("فتوى رقم 15")
    assert chunks[1].startswith("فتوى رقم 16")


def test_fatwa_sections_are_rebuilt_without_explicit_markers():
    text = (
        "السؤال ما حكم صرف مكافأة نهاية الخدمة للموظف المستقيل\n"
        "الجواب تصرف المكافأة كاملة متى استوفى الموظف شروط الاستحقاق\n"
        "الأساس القانوني المادة 39 من قانون العمل\n"
        "السؤال هل يجوز خصم أيام الغياب من الراتب الشهري للعامل\n"
        "الجواب يجوز الخصم بقدر أيام الغياب غير المبررة فقط"
    )
    chunks = segment(text, DocumentCategory.FATWAS)
    assert len(chunks) == 2
    assert "الأساس القانوني" in chunks[0]
    assert chunks[1].startswith("السؤال هل")


def test_judgment_splits_on_numbered_principles():
    text = (
        "أحكام المحكمة العليا في المسائل المدنية\n"
        "المبدأ رقم 1: لا يجوز للمحكمة أن تقضي بما لم يطلبه الخصوم في دعواهم.\n"
        "المبدأ رقم 2: العقد شريعة المتعاقدين فلا يجوز نقضه إلا باتفاقهما."
    )
    chunks = segment(text, DocumentCategory.JUDICIAL_CIVIL)
    assert len(chunks) == 3
    assert chunks[1].startswith("المبدأ رقم 1")
    assert chunks[2].startswith("المبدأ رقم 2")


def test_unnumbered_judgment_is_packed_by_paragraph():
    paragraph = ("وقائع الدعوى " * 40).strip()
    text = "\n\n".join([paragraph] * 3)
    chunks = segment(text, DocumentCategory.JUDICIAL_CRIMINAL)
    assert len(chunks) == 2
    assert all(len(c) <= ChunkingConfig().judicial_pack_chars for c in chunks)
    _assert_ordered_and_disjoint(text, chunks)


def test_oversized_decision_article_is_split_on_sub_items():
    item = "يلتزم المرخص له بالاشتراطات الفنية " * 25
    body = "\n".join(f"{i}- {item.strip()}" for i in range(1, 4))
    text = f"قرار وزاري رقم 5/2021\nالمادة 1: \n{body}"
    chunks = segment(text, DocumentCategory.MINISTERIAL_DECISIONS)
    assert len(chunks) == 3
    assert chunks[0].startswith("المادة 1")
    assert "1- يلتزم" in chunks[0]
    assert [c[:2] for c in chunks[1:]] == ["2-", "3-"]
    assert extract_article_chunk(chunks[0], text) == {"article_number": "1"}


def test_small_decision_articles_are_not_sub_split():
    text = (
        "قرار وزاري رقم 7/2022 بشأن تنظيم ساعات العمل\n"
        "المادة 1: تحدد ساعات العمل الرسمية بسبع ساعات يوميا.\n"
        "المادة 2: يستثنى من ذلك العاملون في المناوبات الليلية."
    )
    chunks = segment(text, DocumentCategory.REGULATIONS)
    assert len(chunks) == 3
    assert chunks[0].startswith("قرار وزاري رقم 7/2022")


def test_royal_order_splits_on_directives():
    text = (
        "أمر سام رقم 3/2022 بتعيين مدير عام للهيئة الوطنية للمساحة\n"
        "نأمر بتعيين السيد المذكور في منصب المدير العام اعتبارا من تاريخه.\n"
        "يطلب من الجهات المختصة تنفيذ هذا الأمر كل فيما يخصه."
    )
    chunks = segment(text, DocumentCategory.ROYAL_ORDERS)
    assert len(chunks) == 3
    assert chunks[1].startswith("نأمر")
    assert chunks[2].startswith("يطلب")


def test_unknown_category_uses_paragraph_packing():
    text = "فقرة أولى تتحدث عن موضوع عام في الوثيقة.\n\nفقرة ثانية تكمل الموضوع نفسه."
    assert segment(text, "not_a_category") == [text]


def test_sentence_fallback_when_category_rules_yield_nothing():
    text = "هذا نص تمهيدي لا يحتوي على أي مواد مرقمة إطلاقا. وهو مخصص لاختبار التقسيم الاحتياطي بالجمل."
    chunks = segment(text, DocumentCategory.LAWS)
    assert chunks == [text]


def test_blank_and_tiny_inputs_yield_no_chunks():
    assert segment("", DocumentCategory.OTHERS) == []
    assert segment("   \n ", DocumentCategory.LAWS) == []
    assert segment("نص قصير جدا", DocumentCategory.OTHERS) == []


def test_all_chunks_are_trimmed_and_longer_than_minimum(law_text, decree_text, fatwa_text):
    minimum = ChunkingConfig().min_chunk_chars
    for text, category in (
        (law_text, DocumentCategory.LAWS),
        (decree_text, DocumentCategory.ROYAL_DECREES),
        (fatwa_text, DocumentCategory.FATWAS),
    ):
        for chunk in segment(text, category):
            assert chunk == chunk.strip()
            assert len(chunk) > minimum
