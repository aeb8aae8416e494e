"""File utility functions."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Union

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class FileInfo:
    """A file or directory under a notes root.

    Directories carry their entries in ``children``; files have ``None``.
    """

    name: str
    path: str
    relative_path: str
    date_modified: _dt.datetime
    children: Optional[List["FileInfo"]] = None

    @property
    def is_directory(self) -> bool:
        return self.children is not None


FileInfoTree = List[FileInfo]


def ensure_dir(p: Path) -> None:
    """Create directory if it doesn't exist."""
    p.mkdir(parents=True, exist_ok=True)


def _matches_extension(path: Path, extensions: Sequence[str]) -> bool:
    if not extensions:
        return True
    suffix = path.suffix.lower()
    return any(suffix == ext.lower() for ext in extensions)


def _mtime(path: Path) -> _dt.datetime:
    return _dt.datetime.fromtimestamp(path.stat().st_mtime, tz=_dt.timezone.utc)


def get_files_info_tree(
    directory: Union[str, Path],
    extensions: Sequence[str] = (),
    _root: Optional[Path] = None,
    _visited: Optional[Set[Path]] = None,
) -> FileInfoTree:
    """Build the file tree under ``directory``, skipping hidden entries.

    Only files whose suffix is in ``extensions`` are kept (all files when
    empty). Directories left without any matching file are dropped.
    Each real directory is walked once, so symlinks back to an ancestor
    or to an already listed directory add nothing. Unreadable entries are
    logged and skipped.
    """
    directory = Path(directory)
    root = _root or directory
    visited = _visited if _visited is not None else set()
    tree: FileInfoTree = []
    try:
        real = directory.resolve()
        if real in visited:
            logger.debug(f"Skipping {directory}: already listed as {real}")
            return tree
        visited.add(real)
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except FileNotFoundError:
        return tree
    except OSError as e:
        logger.warning(f"Could not list {directory}: {e}")
        return tree

    for entry in entries:
        if entry.name.startswith("."):
            continue
        try:
            if entry.is_dir():
                children = get_files_info_tree(entry, extensions, _root=root, _visited=visited)
                if not children:
                    continue
                tree.append(
                    FileInfo(
                        name=entry.name,
                        path=str(entry),
                        relative_path=entry.relative_to(root).as_posix(),
                        date_modified=_mtime(entry),
                        children=children,
                    )
                )
            elif entry.is_file() and _matches_extension(entry, extensions):
                tree.append(
                    FileInfo(
                        name=entry.name,
                        path=str(entry),
                        relative_path=entry.relative_to(root).as_posix(),
                        date_modified=_mtime(entry),
                    )
                )
        except FileNotFoundError:
            # Removed while listing.
            continue
        except OSError as e:
            logger.warning(f"Skipping {entry}: {e}")
            continue
    return tree


def flatten_file_info_tree(tree: Iterable[FileInfo]) -> List[FileInfo]:
    """Depth-first list of the files (not directories) in ``tree``."""
    flat: List[FileInfo] = []
    for node in tree:
        if node.is_directory:
            flat.extend(flatten_file_info_tree(node.children))
        else:
            flat.append(node)
    return flat


def get_files_info_list(directory: Union[str, Path], extensions: Sequence[str] = ()) -> List[FileInfo]:
    """Flat list of matching files under ``directory``."""
    return flatten_file_info_tree(get_files_info_tree(directory, extensions))
