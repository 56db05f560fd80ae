from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Pattern, Tuple

from nltk.tokenize import BlanklineTokenizer, RegexpTokenizer

from common.config import ChunkingConfig
from common.logger import get_logger
from legal_ingestion.patterns import (
    ARTICLE_KEYWORDS,
    ARTICLE_RE,
    ATTACHMENT_RE,
    DECISION_RE,
    DIRECTIVE_RE,
    FATWA_NUMBER_RE,
    FATWA_RE,
    PARENTHESIZED_ARTICLE_RE,
    PRINCIPLE_RE,
    QA_SECTION_RE,
    QUESTION_MARKER,
    SENTENCE_PATTERN,
    SUB_ITEM_RE,
)

log = get_logger(__name__)

Segmenter = Callable[[str, ChunkingConfig], List[str]]

_paragraphs = BlanklineTokenizer()
_sentences = RegexpTokenizer(SENTENCE_PATTERN)


# --------------------
# Shared helpers
# --------------------
def split_before(text: str, marker: Pattern[str]) -> Tuple[str, List[str]]:
    """
    Cut text immediately before every match of marker.

    Returns (preamble, fragments): the text ahead of the first match and one
    fragment per match running up to the next one. With no match the whole
    text is the preamble.
    """
    starts = [m.start() for m in marker.finditer(text)]
    if not starts:
        return text, []
    bounds = starts + [len(text)]
    return text[: starts[0]], [text[a:b] for a, b in zip(bounds, bounds[1:])]


def _pack_spans(text: str, spans: Iterable[Tuple[int, int]], limit: int) -> List[str]:
    """
    Greedily merge consecutive spans into slices of text, starting a new slice
    whenever taking the next span would push the current one past limit.
    """
    pieces: List[str] = []
    start: Optional[int] = None
    end = 0
    for left, right in spans:
        if start is None:
            start = left
        elif right - start > limit:
            pieces.append(text[start:end])
            start = left
        end = right
    if start is not None:
        pieces.append(text[start:end])
    return pieces


def pack_paragraphs(text: str, limit: int) -> List[str]:
    return _pack_spans(text, _paragraphs.span_tokenize(text), limit)


def pack_sentences(text: str, limit: int) -> List[str]:
    return _pack_spans(text, _sentences.span_tokenize(text), limit)


def _long_enough(fragment: str, minimum: int) -> bool:
    return len(fragment.strip()) > minimum


def find_attachment_start(text: str) -> int:
    """
    Offset where a royal decree's attached agreement or law begins, or -1.

    Uses the first marker hit anywhere in the text, so a decree that mentions
    "قانون" before its real attachment is cut early.
    """
    m = ATTACHMENT_RE.search(text)
    if m is None or m.start() == 0:
        return -1
    return m.start()


# --------------------
# Category segmenters
# --------------------
def segment_law(text: str, cfg: ChunkingConfig) -> List[str]:
    preamble, articles = split_before(text, ARTICLE_RE)
    chunks: List[str] = []
    if any(k in preamble for k in ARTICLE_KEYWORDS) or _long_enough(
        preamble, cfg.law_preamble_min_chars
    ):
        chunks.append(preamble)
    chunks.extend(articles)
    return chunks


def segment_royal_decree(text: str, cfg: ChunkingConfig) -> List[str]:
    split_at = find_attachment_start(text)
    if split_at < 0:
        decree, attachment = text, ""
    else:
        decree, attachment = text[:split_at], text[split_at:]

    chunks: List[str] = []
    preamble, articles = split_before(decree, ARTICLE_RE)
    if _long_enough(preamble, cfg.decree_preamble_min_chars):
        chunks.append(preamble)
    chunks.extend(articles)

    if attachment.strip():
        preamble, articles = split_before(attachment, PARENTHESIZED_ARTICLE_RE)
        if _long_enough(preamble, cfg.attachment_preamble_min_chars):
            chunks.append(preamble)
        chunks.extend(articles)
    return chunks


def _join_fatwa_headers(fragments: List[str]) -> List[str]:
    # A bare "فتوى رقم ..." header travels with the question that follows it.
    out: List[str] = []
    carry = ""
    for i, frag in enumerate(fragments):
        frag = carry + frag
        carry = ""
        is_last = i == len(fragments) - 1
        if not is_last and FATWA_NUMBER_RE.match(frag) and QUESTION_MARKER not in frag:
            carry = frag
            continue
        out.append(frag)
    return out


def _rebuild_qa_sections(text: str) -> List[str]:
    """
    Walk question / answer / legal-basis sections, opening a new chunk at
    every question and appending the other sections to the open one.
    """
    sections: List[Tuple[Optional[str], str]] = []
    preamble, bodies = split_before(text, QA_SECTION_RE)
    sections.append((None, preamble))
    for body in bodies:
        sections.append((QA_SECTION_RE.match(body).group(0), body))

    chunks: List[str] = []
    buffer = ""
    for marker, body in sections:
        if marker == QUESTION_MARKER and buffer.strip():
            chunks.append(buffer)
            buffer = body
        else:
            buffer += body
    if buffer.strip():
        chunks.append(buffer)
    return chunks


def segment_fatwa(text: str, cfg: ChunkingConfig) -> List[str]:
    preamble, fragments = split_before(text, FATWA_RE)
    if fragments:
        return [preamble, *_join_fatwa_headers(fragments)]
    log.debug("No fatwa or question markers, rebuilding Q&A sections")
    return _rebuild_qa_sections(text)


def segment_judgment(text: str, cfg: ChunkingConfig) -> List[str]:
    preamble, principles = split_before(text, PRINCIPLE_RE)
    if principles:
        return [preamble, *principles]
    log.debug("No numbered principles, packing paragraphs")
    return pack_paragraphs(text, cfg.judicial_pack_chars)


def segment_decision(text: str, cfg: ChunkingConfig) -> List[str]:
    preamble, fragments = split_before(text, DECISION_RE)
    chunks: List[str] = []
    for frag in [preamble, *fragments]:
        if _long_enough(frag, cfg.oversized_fragment_chars):
            head, items = split_before(frag, SUB_ITEM_RE)
            # a bare article header travels with its first sub-item
            if items and not _long_enough(head, cfg.min_chunk_chars):
                items[0] = head + items[0]
            else:
                chunks.append(head)
            chunks.extend(items)
        else:
            chunks.append(frag)
    return chunks


def segment_royal_order(text: str, cfg: ChunkingConfig) -> List[str]:
    preamble, directives = split_before(text, DIRECTIVE_RE)
    return [preamble, *directives]


def segment_generic(text: str, cfg: ChunkingConfig) -> List[str]:
    return pack_paragraphs(text, cfg.generic_pack_chars)


def segment_sentences(text: str, cfg: ChunkingConfig) -> List[str]:
    return pack_sentences(text, cfg.sentence_pack_chars)


SEGMENTERS: Dict[str, Segmenter] = {
    "article": segment_law,
    "decree_with_attachment": segment_royal_decree,
    "question_answer": segment_fatwa,
    "principle": segment_judgment,
    "article_with_subitems": segment_decision,
    "directive": segment_royal_order,
    "paragraph": segment_generic,
}


def finalize_chunks(text: str, chunks: List[str], cfg: ChunkingConfig) -> List[str]:
    """
    Trim, drop fragments at or under the minimum length, and fall back to
    sentence packing when nothing survives.
    """
    kept = [c.strip() for c in chunks if _long_enough(c, cfg.min_chunk_chars)]
    if kept or not text.strip():
        return kept
    log.debug("Category rules produced no chunks, using sentence fallback")
    return [
        c.strip()
        for c in segment_sentences(text, cfg)
        if _long_enough(c, cfg.min_chunk_chars)
    ]
