"""Path sandboxing for every filesystem access made on behalf of a client.

A requested path is accepted only when it stays inside one of the configured
vault roots, both lexically and after symlinks are resolved. Paths that do not
exist yet (new notes) are judged by the real path of their parent directory.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from obsidian_graph.data_models import VaultConfiguration

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_SEGMENT_SPLIT = re.compile(r"[\\/]" if os.sep == "\\" else r"/")


class DenialReason(str, Enum):
    """Why the sandbox refused a path."""

    HIDDEN_PATH = "hidden-path"
    OUTSIDE_ROOTS = "outside-roots"
    SYMLINK_ESCAPE = "symlink-escape"
    PARENT_MISSING = "parent-missing"
    PARENT_OUTSIDE_ROOTS = "parent-outside-roots"
    OUTSIDE_PRIMARY_ROOT = "outside-primary-root"


_DENIAL_MESSAGES = {
    DenialReason.HIDDEN_PATH: "Access denied - hidden files/directories not allowed",
    DenialReason.OUTSIDE_ROOTS: "Access denied - path outside allowed directories",
    DenialReason.SYMLINK_ESCAPE: "Access denied - symlink target outside allowed directories",
    DenialReason.PARENT_MISSING: "Parent directory does not exist",
    DenialReason.PARENT_OUTSIDE_ROOTS: "Access denied - parent directory outside allowed directories",
    DenialReason.OUTSIDE_PRIMARY_ROOT: "Access denied - path outside the primary vault",
}


class PathDeniedError(ValueError):
    """Raised when a requested path is rejected by the sandbox."""

    def __init__(self, reason: DenialReason, path: str) -> None:
        self.reason = reason
        self.path = path
        super().__init__(f"{_DENIAL_MESSAGES[reason]}: {path}")


@dataclass(frozen=True)
class SandboxResolution:
    """Outcome of a sandbox check: either a real path or a denial reason."""

    requested: str
    path: Optional[Path] = None
    reason: Optional[DenialReason] = None
    detail: str = ""

    @property
    def allowed(self) -> bool:
        return self.reason is None

    def unwrap(self) -> Path:
        """Return the resolved path or raise :class:`PathDeniedError`."""
        if self.reason is not None:
            raise PathDeniedError(self.reason, self.detail or self.requested)
        assert self.path is not None
        return self.path


def normalize_path(path: PathLike) -> str:
    """Normalize a path string for case- and separator-insensitive comparison."""
    return os.path.normcase(os.path.normpath(os.fspath(path))).lower()


def has_hidden_segment(path: PathLike) -> bool:
    """Return ``True`` when any segment of ``path`` starts with a dot.

    ``.`` and ``..`` count as hidden, so traversal segments are caught here too.
    """
    return any(part.startswith(".") for part in _SEGMENT_SPLIT.split(os.fspath(path)) if part)


def _has_prefix(candidate: str, root: str) -> bool:
    """Compare normalized strings, requiring a separator boundary after ``root``."""
    if candidate == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return candidate.startswith(prefix)


def _same_directory(first: str, second: str) -> bool:
    try:
        return os.path.samefile(first, second)
    except OSError:
        return False


def _real_path_within(real_path: str, real_roots: tuple[str, ...]) -> bool:
    """Check a realpath against realpath roots.

    The case-folded prefix match is confirmed on disk: the leading part of
    ``real_path`` must be the root directory itself. On a case-sensitive
    filesystem ``/x/notes`` is then not taken for the root ``/x/Notes``.
    """
    candidate = normalize_path(real_path)
    for real_root in real_roots:
        if not _has_prefix(candidate, normalize_path(real_root)):
            continue
        leading = real_path[: len(real_root)]
        if leading == real_root or _same_directory(leading, real_root):
            return True
    return False


class PathSandbox:
    """Resolve client-supplied paths against a fixed set of vault roots."""

    def __init__(self, configuration: VaultConfiguration) -> None:
        self.configuration = configuration
        normalized: list[str] = []
        for root in configuration.roots:
            for form in (normalize_path(root), normalize_path(os.path.realpath(root))):
                if form not in normalized:
                    normalized.append(form)
        self._normalized_roots = tuple(normalized)
        self._real_roots = tuple(os.path.realpath(root) for root in configuration.roots)
        self._real_primary = (os.path.realpath(configuration.primary.path),)

    def is_within_roots(self, path: PathLike) -> bool:
        """Check containment against the roots, requiring a separator boundary.

        ``/a/b`` contains ``/a/b`` and ``/a/b/c`` but not ``/a/bc``.
        """
        candidate = normalize_path(path)
        return any(_has_prefix(candidate, root) for root in self._normalized_roots)

    def check(self, requested: PathLike, base: Optional[PathLike] = None) -> SandboxResolution:
        """Resolve ``requested`` without raising on denial.

        Args:
            requested: Raw path from the caller. Relative paths are joined to
                ``base`` (or the current working directory when ``base`` is None).
            base: Directory that relative paths are resolved against.

        Returns:
            A :class:`SandboxResolution` holding the real path on success or the
            :class:`DenialReason` on failure. Filesystem errors other than a
            missing target propagate as :class:`OSError`.
        """
        raw = os.fspath(requested)

        if has_hidden_segment(raw):
            return SandboxResolution(raw, reason=DenialReason.HIDDEN_PATH)

        expanded = os.path.expanduser(raw)
        if os.path.isabs(expanded):
            absolute = os.path.abspath(expanded)
        else:
            anchor = os.fspath(base) if base is not None else os.getcwd()
            absolute = os.path.abspath(os.path.join(anchor, expanded))

        if not self.is_within_roots(absolute):
            return SandboxResolution(raw, reason=DenialReason.OUTSIDE_ROOTS, detail=absolute)

        # Existing entries (including dangling symlinks) are judged by their real target.
        if os.path.lexists(absolute):
            real_path = os.path.realpath(absolute)
            if not _real_path_within(real_path, self._real_roots):
                return SandboxResolution(raw, reason=DenialReason.SYMLINK_ESCAPE, detail=absolute)
            return SandboxResolution(raw, path=Path(real_path))

        parent = os.path.dirname(absolute)
        if not os.path.isdir(parent):
            return SandboxResolution(raw, reason=DenialReason.PARENT_MISSING, detail=parent)

        real_parent = os.path.realpath(parent)
        if not _real_path_within(real_parent, self._real_roots):
            return SandboxResolution(raw, reason=DenialReason.PARENT_OUTSIDE_ROOTS, detail=parent)

        return SandboxResolution(raw, path=Path(real_parent) / os.path.basename(absolute))

    def resolve(self, requested: PathLike, base: Optional[PathLike] = None) -> Path:
        """Resolve ``requested`` to a real path inside the roots.

        Raises:
            PathDeniedError: If the sandbox rejects the path.
        """
        resolution = self.check(requested, base)
        if not resolution.allowed:
            logger.debug("Sandbox denied '%s' (%s)", resolution.requested, resolution.reason.value)
        return resolution.unwrap()

    def resolve_in_primary(self, requested: PathLike) -> Path:
        """Resolve a vault-relative path against the primary vault root.

        Absolute and ``~`` paths are accepted only when they land in the primary
        vault; a path inside a secondary vault is denied.

        Raises:
            PathDeniedError: If the sandbox rejects the path or it resolves
                outside the primary vault.
        """
        resolved = self.resolve(requested, base=self.configuration.primary.path)
        if not _real_path_within(os.fspath(resolved), self._real_primary):
            logger.debug("Sandbox denied '%s' (%s)", requested, DenialReason.OUTSIDE_PRIMARY_ROOT.value)
            raise PathDeniedError(DenialReason.OUTSIDE_PRIMARY_ROOT, os.fspath(resolved))
        return resolved
