import re


def clean_content(s: str) -> str:
    """Canonical form used for hashing, classification and segmentation."""
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    s = re.sub(r"[ \t]+", " ", s)
    s = re.sub(r"\n{3,}", "\n\n", s)
    return s.strip()
