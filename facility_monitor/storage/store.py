from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Generic, Iterator, List, Optional, TypeVar, Union

from ..core.config import settings
from ..core.errors import (
    DuplicateIdentifierError,
    InvalidInputError,
    IOFailureError,
    NotFoundError,
    OutOfRangeError,
    ProtectedEntityError,
)
from ..domain.interfaces import END_OF_STREAM, Entity, RecordCodec
from ..domain.models import MAX_ID, MIN_ID, StoreResult, in_id_range

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

PathLike = Union[str, Path]


def normalize_filename(
    name: PathLike,
    suffix: Optional[str] = None,
    max_length: Optional[int] = None,
) -> Path:
    """Ensure ``name`` ends with the data-file suffix.

    The result never exceeds ``max_length - 1`` characters; an over-long base
    name is cut short to make room for the suffix.
    """
    suffix = suffix if suffix is not None else settings.data_suffix
    max_length = max_length if max_length is not None else settings.max_path_length
    text = str(name)
    if text.endswith(suffix):
        return Path(text)

    limit = max_length - 1
    if len(text) + len(suffix) > limit:
        logger.warning("Filename too long to append %s, truncating: %s", suffix, text)
        text = text[: max(0, limit - len(suffix))]
    return Path(text + suffix)


class EntityStore(Generic[E]):
    """In-memory collection of one entity kind backed by a flat record file.

    Subclasses provide the codec, the protection rule, and their own bootstrap.
    """

    codec: RecordCodec[E]
    label = "entity"

    def __init__(self, path: PathLike, autosave: Optional[bool] = None) -> None:
        self.path = normalize_filename(path)
        self.autosave = settings.autosave if autosave is None else autosave
        self._items: List[E] = []

    # --- hooks -----------------------------------------------------------

    def is_protected(self, entity: E) -> bool:
        raise NotImplementedError

    def check_update(self, current: E, replacement: E) -> None:
        """Raise ProtectedEntityError if ``replacement`` breaks a primary invariant."""

    def ensure_primaries(self) -> None:
        """Create whichever mandatory entities are missing after a load."""

    def bootstrap(self) -> None:
        """Replace the in-memory set with the file contents plus missing primaries."""
        self._items = []
        self.load()
        self.ensure_primaries()

    # --- file management -------------------------------------------------

    def load(self, path: Optional[PathLike] = None) -> bool:
        """Merge records from ``path`` into the store.

        A missing file is reported and leaves the store as it was. Corrupt
        records and duplicate identifiers are skipped with a warning.
        """
        target = Path(path) if path is not None else self.path
        try:
            stream = open(target, "rb")
        except OSError as e:
            logger.warning("Could not open %s file '%s' for reading: %s", self.label, target, e)
            return False

        loaded = skipped = 0
        with stream:
            while True:
                entity = self.codec.read_one(stream)
                if entity is END_OF_STREAM:
                    break
                if entity is None:
                    skipped += 1
                    continue
                if self.find_by_id(entity.entity_id) is not None:
                    logger.warning(
                        "Duplicate %s with id %d ignored", self.label, entity.entity_id
                    )
                    skipped += 1
                    continue
                self._items.append(entity)
                loaded += 1

        logger.info(
            "Loaded %d %s record(s) from %s (%d skipped)", loaded, self.label, target, skipped
        )
        return True

    def _write(self, target: Path, entities: List[E]) -> None:
        # Encode everything before truncating the file
        try:
            payload = b"".join(self.codec.encode(entity) for entity in entities)
        except struct.error as e:
            raise IOFailureError(
                f"Could not encode {self.label} records for '{target}': {e}"
            ) from e
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as stream:
                stream.write(payload)
        except OSError as e:
            raise IOFailureError(f"Could not open '{target}' for writing: {e}") from e

    def save(self, path: Optional[PathLike] = None) -> bool:
        target = Path(path) if path is not None else self.path
        self._write(target, self._items)
        logger.info("Saved %d %s record(s) to %s", len(self._items), self.label, target)
        return True

    def clear(self, path: Optional[PathLike] = None) -> bool:
        """Drop every non-protected entity and rewrite the file with the rest."""
        target = Path(path) if path is not None else self.path
        kept = [e for e in self._items if self.is_protected(e)]
        # File first: on failure the in-memory set is still authoritative
        self._write(target, kept)
        dropped = len(self._items) - len(kept)
        self._items = kept
        logger.info(
            "Cleared %s store %s: %d removed, %d protected kept",
            self.label, target, dropped, len(kept),
        )
        return True

    # --- CRUD ------------------------------------------------------------

    def _require(self, entity: Optional[E], action: str) -> E:
        if entity is None:
            raise InvalidInputError(f"Cannot {action} a null {self.label}")
        return entity

    def add(self, entity: E) -> StoreResult:
        entity = self._require(entity, "add")
        entity_id = entity.entity_id
        if self.find_by_id(entity_id) is not None:
            return StoreResult.failure(DuplicateIdentifierError(
                f"{self.label.capitalize()} {entity_id} already exists", entity_id
            ))
        if not in_id_range(entity_id):
            return StoreResult.failure(OutOfRangeError(
                f"{self.label.capitalize()} id must be between {MIN_ID} and {MAX_ID}", entity_id
            ))
        self._items.append(entity)
        self._autosave()
        return StoreResult.success()

    def update(self, entity: E) -> StoreResult:
        entity = self._require(entity, "update")
        entity_id = entity.entity_id
        for index, current in enumerate(self._items):
            if current.entity_id == entity_id:
                self.check_update(current, entity)
                self._items[index] = entity
                self._autosave()
                return StoreResult.success()
        return StoreResult.failure(NotFoundError(
            f"{self.label.capitalize()} {entity_id} not found", entity_id
        ))

    def remove(self, entity: E) -> StoreResult:
        """Delete ``entity`` and immediately rewrite the whole file."""
        entity = self._require(entity, "remove")
        entity_id = entity.entity_id
        if self.is_protected(entity):
            raise ProtectedEntityError(
                f"Cannot remove primary {self.label} {entity_id}", entity_id
            )
        current = self.find_by_id(entity_id)
        if current is None:
            return StoreResult.failure(NotFoundError(
                f"{self.label.capitalize()} {entity_id} not found", entity_id
            ))
        remaining = [e for e in self._items if e is not current]
        self._write(self.path, remaining)
        self._items = remaining
        logger.info(
            "Removed %s %d; saved %d record(s) to %s",
            self.label, entity_id, len(remaining), self.path,
        )
        return StoreResult.success()

    def _autosave(self) -> None:
        if self.autosave:
            self.save()

    # --- queries ---------------------------------------------------------

    def find_by_id(self, entity_id: int) -> Optional[E]:
        for entity in self._items:
            if entity.entity_id == entity_id:
                return entity
        return None

    def all(self) -> List[E]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items))

    def __contains__(self, entity_id: object) -> bool:
        return isinstance(entity_id, int) and self.find_by_id(entity_id) is not None
