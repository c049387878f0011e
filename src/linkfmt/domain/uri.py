"""URI — scheme + POSIX path + fragment identifying a workspace resource.

Paths are always POSIX-style strings, independent of the host OS, so
relative paths computed here can be written straight into link text.
"""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, replace
from pathlib import Path, PurePath

FILE_SCHEME = "file"
PLACEHOLDER_SCHEME = "placeholder"

# Matches any extension in change_extension().
ANY_EXTENSION = "*"


@dataclass(frozen=True)
class URI:
    """Immutable resource identifier.

    Attributes:
        scheme: ``"file"`` for real resources, ``"placeholder"`` for link
            targets that do not exist in the workspace.
        path: POSIX path (absolute for files, relative after
            :meth:`relative_to`).
        fragment: Section anchor without the leading ``#``.
    """

    scheme: str = FILE_SCHEME
    path: str = ""
    fragment: str = ""

    @classmethod
    def file(cls, path: str | os.PathLike[str]) -> URI:
        """Build a ``file`` URI from a filesystem path."""
        if isinstance(path, PurePath):
            return cls(scheme=FILE_SCHEME, path=path.as_posix())
        return cls(scheme=FILE_SCHEME, path=os.fspath(path).replace("\\", "/"))

    @classmethod
    def placeholder(cls, path: str) -> URI:
        """Build a URI for a link target that has no backing resource."""
        return cls(scheme=PLACEHOLDER_SCHEME, path=path)

    def is_placeholder(self) -> bool:
        return self.scheme == PLACEHOLDER_SCHEME

    def with_fragment(self, fragment: str) -> URI:
        return replace(self, fragment=fragment)

    def without_fragment(self) -> URI:
        return replace(self, fragment="")

    def get_directory(self) -> URI:
        """The containing directory. The fragment is dropped."""
        return URI(scheme=self.scheme, path=posixpath.dirname(self.path))

    def get_basename(self) -> str:
        return posixpath.basename(self.path)

    def get_extension(self) -> str:
        """Extension of the basename including the dot, or ``""``."""
        return posixpath.splitext(self.get_basename())[1]

    def change_extension(self, from_ext: str, to_ext: str) -> URI:
        """Replace the path's *from_ext* suffix with *to_ext*.

        *from_ext* may be :data:`ANY_EXTENSION` to match whatever
        extension the path carries. Paths not ending with *from_ext* are
        returned unchanged.
        """
        old = self.get_extension() if from_ext == ANY_EXTENSION else from_ext
        if not old or not self.path.endswith(old):
            return self
        return replace(self, path=self.path[: -len(old)] + to_ext)

    def joinpath(self, *parts: str) -> URI:
        """Join *parts* onto this path and normalize ``.``/``..`` segments."""
        joined = posixpath.normpath(posixpath.join(self.path, *parts))
        return replace(self, path=joined, fragment="")

    def relative_to(self, directory: URI) -> URI:
        """Express this URI's path relative to *directory*.

        Scheme and fragment are kept.
        """
        start = directory.path or "."
        return replace(self, path=posixpath.relpath(self.path, start=start))

    def to_path(self) -> Path:
        return Path(self.path)

    def __str__(self) -> str:
        text = f"{self.scheme}://{self.path}"
        if self.fragment:
            text += f"#{self.fragment}"
        return text
