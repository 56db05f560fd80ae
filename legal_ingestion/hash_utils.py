import hashlib

from legal_ingestion.cleaners import clean_content


def sha256_text(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def content_hash(text: str) -> str:
    """SHA-256 of the cleaned text, so whitespace-only variants collide."""
    return sha256_text(clean_content(text))
