"""Filesystem access used by the reporter.

The reporter only needs four operations, so they are grouped behind a small
protocol.  Tests substitute a ``Mock(spec=Filesystem)``; production code uses
:class:`LocalFilesystem`.  Every operation raises :class:`OSError` on failure.
"""

from pathlib import Path
from typing import Protocol, Union

PathLike = Union[str, Path]


class Filesystem(Protocol):
    def exists(self, path: PathLike) -> bool: ...

    def create_directory(self, path: PathLike) -> None: ...

    def read_binary(self, path: PathLike) -> bytes: ...

    def write_text(self, path: PathLike, content: str) -> None: ...


class LocalFilesystem:
    """Filesystem backed by the local disk."""

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def create_directory(self, path: PathLike) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def read_binary(self, path: PathLike) -> bytes:
        return Path(path).read_bytes()

    def write_text(self, path: PathLike, content: str) -> None:
        Path(path).write_text(content, encoding="utf-8")
