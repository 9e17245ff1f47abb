from __future__ import annotations

import json
import logging
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Optional

LOGGER = logging.getLogger(__name__)


class ForecastCache:
    """Timestamp-based on-disk cache of raw forecast payloads.

    A TTL of zero disables the cache entirely: nothing is read or written.
    """

    def __init__(self, root: Path, ttl_minutes: int = 0) -> None:
        self.root = root
        self.ttl = timedelta(minutes=max(ttl_minutes, 0))

    @property
    def enabled(self) -> bool:
        return self.ttl > timedelta(0)

    def _slot(self, key: str) -> Path:
        return self.root / "forecast" / f"{key}.json"

    def _is_fresh(self, path: Path) -> bool:
        if not path.exists():
            return False
        mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
        return datetime.now(UTC) - mtime <= self.ttl

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        path = self._slot(key)
        if not self._is_fresh(path):
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            LOGGER.warning("Discarding unreadable cache entry %s: %s", path, exc)
            return None

    def put(self, key: str, payload: Any) -> None:
        if not self.enabled:
            return
        path = self._slot(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    def fetch(self, key: str, loader: Callable[[], Any]) -> Any:
        cached = self.get(key)
        if cached is not None:
            LOGGER.debug("Cache hit for %s", key)
            return cached
        payload = loader()
        self.put(key, payload)
        return payload
