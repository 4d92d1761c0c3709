"""JSON file store used when no remote database is configured."""

import json
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class JsonStore:
    """A single JSON document on disk guarded by a process-wide lock."""

    path: Path
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def read(self) -> dict[str, object]:
        """Return a snapshot of the document."""
        with self._lock:
            return self._load()

    @contextmanager
    def transaction(self) -> Iterator[dict[str, object]]:
        """Yield the document for mutation and write it back on success."""
        with self._lock:
            data = self._load()
            yield data
            self._write(data)

    def _load(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as handle:
            return json.load(handle)

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle)
        os.replace(tmp_path, self.path)
