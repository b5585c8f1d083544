"""JSON file persistence for the portal's record collections.

Each collection kind lives in its own document under the data directory.
Every access is a whole-file round trip: ``load`` reads and parses the full
document, ``save`` serializes the full document and replaces the file.
"""

import logging
import os
import stat
import tempfile
import threading
from contextlib import contextmanager, nullcontext
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from customer_portal.domain.exceptions import StoreCorruptedError, StoreError
from customer_portal.infrastructure.storage import json_codec
from customer_portal.infrastructure.observability.metrics import (
    store_failures_counter,
    store_operations_counter,
)

logger = logging.getLogger(__name__)


class CollectionKind(str, Enum):
    """Logical collections and the file each one is stored in"""

    PURCHASES = "purchases"
    MOVEMENTS = "movements"
    PROFILE = "profile"

    @property
    def filename(self) -> str:
        return f"{self.value}.json"


# Shared by every store instance so two stores over one directory exclude each other
_locks: Dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        lock = _locks.get(path)
        if lock is None:
            lock = _locks[path] = threading.Lock()
        return lock


# Read once at import: os.umask can only be queried by setting it
_UMASK = os.umask(0o022)
os.umask(_UMASK)


def _file_mode(path: Path) -> int:
    """Mode of the file being replaced, or what a new file would get under the umask"""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_UMASK


class RecordStore:
    """Load/save of whole collection documents under a single data directory"""

    def __init__(self, data_dir: Path | str, locking: bool = True):
        self.data_dir = Path(data_dir)
        self.locking = locking

    def path_for(self, kind: CollectionKind) -> Path:
        return self.data_dir / kind.filename

    def exists(self, kind: CollectionKind) -> bool:
        return self.path_for(kind).is_file()

    @contextmanager
    def lock(self, kind: CollectionKind) -> Iterator[None]:
        """Serialize read-modify-write cycles on one collection within this process"""
        guard = _lock_for(self.path_for(kind).resolve()) if self.locking else nullcontext()
        with guard:
            yield

    def load(self, kind: CollectionKind) -> Optional[Dict[str, Any]]:
        """
        Read and parse the collection's document.

        Returns:
            The parsed JSON object, or None when the file does not exist

        Raises:
            StoreCorruptedError: File is not valid JSON or not a JSON object
            StoreError: File could not be read
        """
        path = self.path_for(kind)
        store_operations_counter.labels(collection=kind.value, operation="load").inc()

        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.debug("No document for %s at %s", kind.value, path)
            return None
        except OSError as e:
            store_failures_counter.labels(collection=kind.value, operation="load").inc()
            raise StoreError(kind.value, f"cannot read {path}: {e}") from e

        try:
            document = json_codec.loads(raw)
        except ValueError as e:
            store_failures_counter.labels(collection=kind.value, operation="load").inc()
            raise StoreCorruptedError(kind.value, f"invalid JSON in {path}: {e}") from e

        if not isinstance(document, dict):
            store_failures_counter.labels(collection=kind.value, operation="load").inc()
            raise StoreCorruptedError(kind.value, f"expected a JSON object in {path}")

        logger.debug("Loaded %s from %s", kind.value, path)
        return document

    def save(self, kind: CollectionKind, document: Dict[str, Any]) -> None:
        """
        Overwrite the collection's document in full.

        The document is serialized before the file is touched, and the new
        contents are moved into place with a single rename so a concurrent
        reader sees either the old or the new document.

        Raises:
            StoreError: Document is not serializable or the file could not be written
        """
        path = self.path_for(kind)
        store_operations_counter.labels(collection=kind.value, operation="save").inc()

        try:
            payload = json_codec.dumps(document, indent=2).encode("utf-8")
        except (TypeError, ValueError) as e:
            store_failures_counter.labels(collection=kind.value, operation="save").inc()
            raise StoreError(kind.value, f"cannot serialize document: {e}") from e

        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{kind.value}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            # mkstemp creates the file 0600; keep the mode a plain write would give
            os.chmod(tmp_name, _file_mode(path))
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            store_failures_counter.labels(collection=kind.value, operation="save").inc()
            raise StoreError(kind.value, f"cannot write {path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.debug("Saved %s to %s", kind.value, path)

    def delete(self, kind: CollectionKind) -> bool:
        """Remove the collection's file. Returns False if there was nothing to remove."""
        path = self.path_for(kind)
        store_operations_counter.labels(collection=kind.value, operation="delete").inc()

        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            store_failures_counter.labels(collection=kind.value, operation="delete").inc()
            raise StoreError(kind.value, f"cannot delete {path}: {e}") from e

        logger.debug("Deleted %s at %s", kind.value, path)
        return True
