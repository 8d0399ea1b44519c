"""local_map tool: bounded, workspace-aware directory enumeration.

The scan is a breadth-first walk over an explicit work queue. It is limited
by depth, by a wall-clock deadline and by an entry cap. The deadline and cap
are checked cooperatively before each directory and each child; a single
very large directory read is not interrupted part-way through.
"""

import logging
import os
import time
from collections import deque
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from ..errors import AccessDeniedError, FilesystemError, PathNotFoundError, ToolArgumentError
from .arguments import ensure_object, optional_bool, optional_int, optional_str
from .result import ToolResult

logger = logging.getLogger(__name__)

MAX_ENTRIES = 8_000
TIMEOUT_SECONDS = 2.0
MIN_DEPTH = 0
MAX_DEPTH = 6
DEFAULT_DEPTH = 2
DEFAULT_PATH = "."

HIDDEN_PREFIX = "."
SKIPPED_NAMES = frozenset({"node_modules", ".git"})


@dataclass(frozen=True)
class FileEntry:
    name: str
    path: str
    is_dir: bool
    is_symlink: bool
    size_bytes: int
    depth: int


@dataclass
class TraversalResult:
    root: str
    entries: List[FileEntry] = field(default_factory=list)
    truncated: bool = False
    timed_out: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "root": self.root,
            "entries": [asdict(entry) for entry in self.entries],
        }
        # Flags are only reported when set
        if self.truncated:
            data["truncated"] = True
        if self.timed_out:
            data["timed_out"] = True
        return data


@dataclass
class LocalMapArgs:
    path: str = DEFAULT_PATH
    depth: int = DEFAULT_DEPTH
    follow_symlinks: bool = False

    @classmethod
    def from_arguments(cls, arguments: Any) -> "LocalMapArgs":
        args = ensure_object(arguments, "local_map")
        return cls(
            path=optional_str(args, "path") or DEFAULT_PATH,
            depth=optional_int(args, "depth", DEFAULT_DEPTH),
            follow_symlinks=optional_bool(args, "follow_symlinks", False),
        )


def is_skipped_name(name: str) -> bool:
    """Hidden entries, node_modules and .git are never listed."""
    return name.startswith(HIDDEN_PREFIX) or name in SKIPPED_NAMES


def validate_depth(depth: int) -> None:
    if not MIN_DEPTH <= depth <= MAX_DEPTH:
        raise ToolArgumentError(
            f"Depth must be between {MIN_DEPTH} and {MAX_DEPTH} (requested: {depth})"
        )


def resolve_scan_root(path: str, workspace_root: Optional[Path] = None) -> Path:
    """Resolve and security-check the scan root.

    Relative paths are joined to the workspace root (the process working
    directory) and must stay inside it once symlinks and ``..`` are resolved.
    Absolute paths are an explicit opt-in and skip the containment check.

    Args:
        path: Path argument as given by the caller.
        workspace_root: Override for the workspace root. Defaults to cwd.

    Returns:
        Path: Canonical scan root.

    Raises:
        PathNotFoundError: If the target does not exist.
        AccessDeniedError: If a relative path escapes the workspace.
        FilesystemError: If canonicalization fails for another reason.
    """
    workspace = workspace_root if workspace_root is not None else Path.cwd()
    try:
        workspace_canonical = workspace.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise FilesystemError(f"Failed to canonicalize workspace: {e}") from e

    requested = Path(path)
    is_absolute = requested.is_absolute()
    target = requested if is_absolute else workspace / requested

    if not target.exists():
        raise PathNotFoundError(f"Path does not exist: {target}")

    try:
        target_canonical = target.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise FilesystemError(f"Failed to canonicalize path: {e}") from e

    if not is_absolute and not target_canonical.is_relative_to(workspace_canonical):
        raise AccessDeniedError(
            f"Access denied: path '{target_canonical}' is outside workspace root "
            f"'{workspace_canonical}'"
        )

    return target_canonical


def _describe_entry(entry: os.DirEntry, depth: int) -> FileEntry:
    """Build a FileEntry; raises OSError if the entry cannot be stat'ed."""
    is_symlink = entry.is_symlink()
    # is_dir() follows links, so a link to a directory reports as a directory
    is_dir = entry.is_dir()
    size_bytes = 0 if is_dir else entry.stat(follow_symlinks=False).st_size
    return FileEntry(
        name=entry.name,
        path=entry.path,
        is_dir=is_dir,
        is_symlink=is_symlink,
        size_bytes=size_bytes,
        depth=depth,
    )


def enumerate_directory(
    path: str = DEFAULT_PATH,
    depth: int = DEFAULT_DEPTH,
    follow_symlinks: bool = False,
    *,
    workspace_root: Optional[Path] = None,
    max_entries: int = MAX_ENTRIES,
    timeout: float = TIMEOUT_SECONDS,
    clock: Callable[[], float] = time.monotonic,
) -> TraversalResult:
    """Enumerate a directory tree breadth-first under strict limits.

    The root's own children are always listed (depth 1). A directory found at
    depth ``d`` is expanded only while ``d < depth``, so no entry is ever
    deeper than ``max(depth, 1)``.

    Args:
        path: Scan root; relative paths are confined to the workspace.
        depth: Depth bound in [0, 6].
        follow_symlinks: Expand symlinked directories as well.
        workspace_root: Override for the workspace root. Defaults to cwd.
        max_entries: Entry cap; reaching it sets ``truncated``.
        timeout: Wall-clock budget in seconds; exceeding it sets ``timed_out``.
        clock: Monotonic time source.

    Returns:
        TraversalResult: Entries in discovery order (parents before children,
        siblings in the order the OS reports them).

    Raises:
        ToolArgumentError: If depth is out of range (checked before any I/O).
        FilesystemError: If the root is missing or outside the workspace.
    """
    validate_depth(depth)
    root = resolve_scan_root(path, workspace_root)

    start = clock()
    result = TraversalResult(root=str(root))
    queue: Deque[Tuple[str, int]] = deque([(str(root), 0)])

    def limit_reached() -> bool:
        if clock() - start > timeout:
            result.timed_out = True
            return True
        if len(result.entries) >= max_entries:
            result.truncated = True
            return True
        return False

    while queue:
        if limit_reached():
            break

        current_path, current_depth = queue.popleft()

        try:
            iterator = os.scandir(current_path)
        except OSError as e:
            logger.warning("Failed to read directory %s: %s", current_path, e)
            continue

        with iterator:
            while True:
                try:
                    entry = next(iterator)
                except StopIteration:
                    break
                except OSError as e:
                    logger.warning("Failed to read entry in %s: %s", current_path, e)
                    break

                if limit_reached():
                    break

                if is_skipped_name(entry.name):
                    continue

                child_depth = current_depth + 1
                try:
                    file_entry = _describe_entry(entry, child_depth)
                except OSError as e:
                    logger.warning("Failed to read metadata for %s: %s", entry.path, e)
                    continue

                result.entries.append(file_entry)

                # Expand only below the bound so no entry is deeper than max(depth, 1);
                # depth 0 still lists the root children
                if file_entry.is_dir and child_depth < depth:
                    if not file_entry.is_symlink or follow_symlinks:
                        queue.append((file_entry.path, child_depth))

        if result.truncated or result.timed_out:
            break

    logger.debug(
        "local_map %s: %d entries (truncated=%s, timed_out=%s)",
        result.root,
        len(result.entries),
        result.truncated,
        result.timed_out,
    )
    return result


def execute(arguments: Any) -> ToolResult:
    args = LocalMapArgs.from_arguments(arguments)
    result = enumerate_directory(args.path, args.depth, args.follow_symlinks)
    return ToolResult.ok(result.to_dict())
