import pytest

from common.config import QueueConfig

LAW_TEXT = (
    "قانون العمل\n"
    "المادة 1: يسري هذا القانون على جميع العاملين في القطاع الخاص.\n"
    "المادة 2: تلتزم جهة العمل بتوفير بيئة عمل آمنة للعاملين لديها.\n"
    "المادة 3: يعاقب كل من يخالف أحكام هذا القانون بغرامة مالية."
)

DECREE_TEXT = (
    "مرسوم سلطاني رقم 12/2020 بالتصديق على الاتفاق الثنائي\n"
    "نحن هيثم بن طارق سلطان عمان\n"
    "بعد الاطلاع على النظام الأساسي للدولة، رسمنا بما هو آت:\n"
    "المادة الأولى: التصديق على الاتفاق المشار إليه وفقا للصيغة المرفقة.\n"
    "المادة الثانية: ينشر هذا المرسوم في الجريدة الرسمية ويعمل به من تاريخ صدوره.\n"
    "صدر في: 2020-03-15\n"
    "اتفاقية تعاون بين الحكومتين\n"
    "المادة ( 1 ) يتعاون الطرفان في مجالات التجارة والاستثمار المتبادل.\n"
    "المادة ( 2 ) تسري هذه الاتفاقية لمدة خمس سنوات قابلة للتجديد."
)

FATWA_TEXT = (
    "السؤال: ما حكم إجازة الموظف في القطاع الخاص؟ "
    "الجواب: يستحق الموظف إجازة سنوية مدفوعة الأجر وفقا للمادة 61 من قانون العمل، "
    "وهذه إجابة فتوى وزارة العدل والشؤون القانونية على الاستفسار."
)


@pytest.fixture
def law_text():
    return LAW_TEXT


@pytest.fixture
def decree_text():
    return DECREE_TEXT


@pytest.fixture
def fatwa_text():
    return FATWA_TEXT


@pytest.fixture
def fast_queue():
    return QueueConfig(inter_job_delay_seconds=0)
