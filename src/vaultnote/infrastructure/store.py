"""Document store over the vault directory tree.

INVARIANT: Files are truth. Every registry (categories, content types)
is a fresh scan of this store; nothing is cached between runs.

All paths are vault-relative POSIX strings such as
``"01 - Primary Categories/Red Team.md"``. Any path resolving outside
the vault root is rejected.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

from vaultnote.domain.content import parse_frontmatter
from vaultnote.domain.errors import StoreOperationError
from vaultnote.domain.models import DocumentTimestamps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreEntry:
    """One child of a store directory."""

    name: str
    path: str
    is_dir: bool

    @property
    def stem(self) -> str:
        return PurePosixPath(self.name).stem

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.name).suffix


class DocumentStore(Protocol):
    """Operations the generator needs from the backing note store."""

    def exists(self, path: str) -> bool: ...

    def read(self, path: str) -> str: ...

    def create(self, path: str, content: str) -> None: ...

    def write(self, path: str, content: str) -> None: ...

    def create_directory(self, path: str) -> None: ...

    def move(self, path: str, destination: str) -> str: ...

    def list_children(self, path: str) -> list[StoreEntry]: ...

    def frontmatter(self, path: str) -> dict[str, Any]: ...

    def timestamps(self, path: str) -> DocumentTimestamps: ...


def join_path(*parts: str) -> str:
    """Join vault-relative path segments, ignoring empty ones."""
    return str(PurePosixPath(*[p for p in parts if p]))


class FileDocumentStore:
    """Filesystem-backed :class:`DocumentStore` rooted at a vault directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> Path:
        """Map a vault-relative path to an absolute filesystem path."""
        result = self.root / path
        # Guard against path traversal via crafted titles or type names
        if not result.resolve().is_relative_to(self.root.resolve()):
            raise StoreOperationError("resolve", path, "path escapes vault root")
        return result

    def relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def read(self, path: str) -> str:
        try:
            return self.resolve(path).read_text(encoding="utf-8")
        except (OSError, UnicodeError) as exc:
            raise StoreOperationError("read", path, str(exc)) from exc

    def list_children(self, path: str) -> list[StoreEntry]:
        """List direct children of a directory, sorted by name.

        Raises:
            StoreOperationError: If the directory is missing or unreadable.
        """
        target = self.resolve(path)
        try:
            children = sorted(target.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise StoreOperationError("list", path, str(exc)) from exc
        return [
            StoreEntry(name=child.name, path=join_path(path, child.name), is_dir=child.is_dir())
            for child in children
        ]

    def frontmatter(self, path: str) -> dict[str, Any]:
        fm, _body = parse_frontmatter(self.read(path))
        return fm

    def timestamps(self, path: str) -> DocumentTimestamps:
        """Creation and modification times from filesystem metadata.

        Falls back to ``st_ctime`` where the platform has no birth time.
        """
        try:
            stat = self.resolve(path).stat()
        except OSError as exc:
            raise StoreOperationError("stat", path, str(exc)) from exc
        created = getattr(stat, "st_birthtime", stat.st_ctime)
        return DocumentTimestamps(
            created=datetime.fromtimestamp(created, tz=UTC).astimezone(),
            modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC).astimezone(),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, path: str, content: str) -> None:
        """Create a new file. Refuses to overwrite an existing one."""
        target = self.resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("x", encoding="utf-8") as fh:
                fh.write(content)
        except OSError as exc:
            raise StoreOperationError("create", path, str(exc)) from exc
        logger.debug("Created %s", path)

    def write(self, path: str, content: str) -> None:
        target = self.resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StoreOperationError("write", path, str(exc)) from exc

    def create_directory(self, path: str) -> None:
        try:
            self.resolve(path).mkdir(parents=True, exist_ok=False)
        except OSError as exc:
            raise StoreOperationError("mkdir", path, str(exc)) from exc
        logger.debug("Created directory %s", path)

    def move(self, path: str, destination: str) -> str:
        """Move a document and return its new vault-relative path."""
        source = self.resolve(path)
        target = self.resolve(destination)
        if source == target:
            return destination
        if target.exists():
            raise StoreOperationError("move", destination, "destination already exists")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(target))
        except OSError as exc:
            raise StoreOperationError("move", path, str(exc)) from exc
        logger.debug("Moved %s -> %s", path, destination)
        return destination
