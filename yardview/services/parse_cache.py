# yardview/services/parse_cache.py
import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from typing import Optional

from yardview.core.config import get_settings
from yardview.schemas.yard import ParseResult


@dataclass
class CachedUpload:
    upload_id: str
    filename: Optional[str]
    result: ParseResult
    created_at: datetime = field(default_factory=datetime.now)


class ParseResultCache:
    """
    Caché en memoria de los últimos archivos procesados (LRU).
    Sin garantías de persistencia: al reiniciar se pierde.
    """

    def __init__(self, max_entries: int = 8):
        self.max_entries = max(1, max_entries)
        self._entries: "OrderedDict[str, CachedUpload]" = OrderedDict()
        self._lock = threading.Lock()

    def put(self, result: ParseResult, filename: Optional[str] = None) -> CachedUpload:
        entry = CachedUpload(upload_id=uuid.uuid4().hex, filename=filename, result=result)
        with self._lock:
            self._entries[entry.upload_id] = entry
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return entry

    def get(self, upload_id: str) -> Optional[CachedUpload]:
        with self._lock:
            entry = self._entries.get(upload_id)
            if entry is not None:
                self._entries.move_to_end(upload_id)
            return entry

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


@lru_cache()
def get_parse_cache() -> ParseResultCache:
    return ParseResultCache(get_settings().PARSE_CACHE_SIZE)
