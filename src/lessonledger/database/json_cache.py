"""JSON file entry store used as the offline fallback cache."""

import json
import logging
from pathlib import Path
from typing import Sequence

from lessonledger.database.base import EntryStore
from lessonledger.domain.records import entry_to_record, record_to_entry
from lessonledger.domain.entities import LessonEntry
from lessonledger.domain.errors import StorageUnavailable, StorageWriteFailed

logger = logging.getLogger(__name__)


class JSONFileEntryStore(EntryStore):
    """Entry store holding a JSON array of entry records in one file.

    A missing file is created holding an empty array.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _ensure_file(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")

    def load(self) -> list[LessonEntry]:
        """Read every record from the cache file."""
        try:
            self._ensure_file()
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageUnavailable(f"Cannot read cache {self.path}: {e}")

        if not isinstance(data, list):
            raise StorageUnavailable(f"Cache {self.path} does not hold a list of entries")

        try:
            return [record_to_entry(record) for record in data]
        except ValueError as e:
            raise StorageUnavailable(f"Cache {self.path} is corrupt: {e}")

    def replace_all(self, entries: Sequence[LessonEntry]) -> None:
        """Overwrite the cache file with ``entries``."""
        content = json.dumps([entry_to_record(e) for e in entries], indent=2)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(content, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageWriteFailed(f"Cannot write cache {self.path}: {e}")
        logger.debug(f"Cached {len(entries)} entries in {self.path}")
