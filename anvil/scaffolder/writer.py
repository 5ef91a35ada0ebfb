"""Tree writers: the only place where generated projects touch storage.

``FileSystemWriter`` materialises a ``ProjectTree`` under a base directory
using ``pathlib``; ``InMemoryWriter`` records the same operations in
dictionaries so the generator can be exercised without a disk.  Both
report failures as ``FileSystemError`` with the offending path and
operation.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Protocol


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FileSystemError(Exception):
    """Raised when a directory or file cannot be created.

    Generation is aborted on the first failure; files already written stay
    where they are.
    """

    def __init__(self, path: str | Path, operation: str, reason: str) -> None:
        self.path = str(path)
        self.operation = operation
        self.reason = reason
        super().__init__(f"Cannot {operation} {self.path}: {reason}")


class ProjectExistsError(FileSystemError):
    """Raised before any write when the project root already exists."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(
            path,
            "create",
            "target already exists (use overwrite to regenerate in place)",
        )


# ---------------------------------------------------------------------------
# Writer protocol
# ---------------------------------------------------------------------------


class TreeWriter(Protocol):
    """Capability the generator writes through.  Paths are POSIX-relative."""

    def exists(self, path: str) -> bool: ...

    def make_dirs(self, path: str) -> None: ...

    def write_file(self, path: str, content: str) -> None: ...


# ---------------------------------------------------------------------------
# Filesystem implementation
# ---------------------------------------------------------------------------


class FileSystemWriter:
    """Writes tree entries below *base_dir* on the real filesystem."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    def resolve(self, path: str) -> Path:
        return self.base_dir.joinpath(*PurePosixPath(path).parts)

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def make_dirs(self, path: str) -> None:
        target = self.resolve(path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except FileExistsError as exc:
            raise FileSystemError(target, "mkdir", "a file with that name already exists") from exc
        except OSError as exc:
            raise FileSystemError(target, "mkdir", exc.strerror or str(exc)) from exc

    def write_file(self, path: str, content: str) -> None:
        target = self.resolve(path)
        self.make_dirs(PurePosixPath(path).parent.as_posix())
        try:
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise FileSystemError(target, "write", exc.strerror or str(exc)) from exc


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------


class InMemoryWriter:
    """Records directories and files in memory.

    Mirrors the filesystem rules the generator relies on: directories are
    created with their parents, a directory cannot replace a file and a file
    cannot replace a directory.
    """

    def __init__(self) -> None:
        self.directories: set[str] = set()
        self.files: dict[str, str] = {}
        self.operations: list[tuple[str, str]] = []

    def exists(self, path: str) -> bool:
        key = _normalise(path)
        return key in self.directories or key in self.files

    def make_dirs(self, path: str) -> None:
        key = _normalise(path)
        current = PurePosixPath()
        for part in PurePosixPath(key).parts:
            current = current / part
            name = current.as_posix()
            if name in self.files:
                raise FileSystemError(name, "mkdir", "a file with that name already exists")
            self.directories.add(name)
        self.operations.append(("mkdir", key))

    def write_file(self, path: str, content: str) -> None:
        key = _normalise(path)
        if key in self.directories:
            raise FileSystemError(key, "write", "is a directory")
        parent = PurePosixPath(key).parent.as_posix()
        if parent != ".":
            self.make_dirs(parent)
        self.files[key] = content
        self.operations.append(("write", key))

    def read(self, path: str) -> str:
        return self.files[_normalise(path)]


def _normalise(path: str) -> str:
    return PurePosixPath(path).as_posix()
