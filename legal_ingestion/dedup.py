from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Set

import orjson

from common.logger import get_logger

log = get_logger(__name__)


class DedupRegistry:
    """
    Set of content hashes already admitted in this session.

    Only grows while a batch runs. Callers may persist it between sessions
    with save() / load().
    """

    def __init__(self, hashes: Iterable[str] = ()):
        self._hashes: Set[str] = set(hashes)

    def __contains__(self, content_hash: object) -> bool:
        return content_hash in self._hashes

    def __len__(self) -> int:
        return len(self._hashes)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._hashes))

    def add(self, content_hash: str) -> None:
        self._hashes.add(content_hash)

    def update(self, hashes: Iterable[str]) -> None:
        self._hashes.update(hashes)

    def clear(self) -> None:
        self._hashes.clear()

    @classmethod
    def load(cls, path: Path) -> "DedupRegistry":
        path = Path(path)
        if not path.exists():
            log.info("No hash store at %s, starting empty", path)
            return cls()
        data = orjson.loads(path.read_bytes())
        if not isinstance(data, list):
            raise ValueError(f"Hash store {path} must contain a JSON list")
        log.info("Loaded %d known hashes from %s", len(data), path)
        return cls(str(h) for h in data)

    def save(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(list(self), option=orjson.OPT_INDENT_2))
        log.info("Wrote %d hashes to %s", len(self), path)
