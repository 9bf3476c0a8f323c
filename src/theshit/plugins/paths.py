"""Path algebra for script rule batches.

Pure functions over :class:`pathlib.Path`; nothing here touches the disk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

MODULE_SEPARATOR = "."


def common_ancestor(paths: Iterable[Path]) -> Path | None:
    """Return the longest common ancestor directory of *paths*.

    A single path yields its parent. Several paths are compared component by
    component, in input order, up to the first divergence. Returns None for
    an empty input or when the paths share no component at all.
    """
    items = [Path(p) for p in paths]
    if not items:
        return None
    if len(items) == 1:
        return items[0].parent

    common = list(items[0].parts)
    for path in items[1:]:
        shared: list[str] = []
        for ours, theirs in zip(common, path.parts):
            if ours != theirs:
                break
            shared.append(ours)
        common = shared
        if not common:
            return None
    return Path(*common)


def module_name(root: Path, path: Path) -> str | None:
    """Derive the dotted import name of *path* relative to *root*.

    ``module_name(Path("/root/modules"), Path("/root/modules/sub/dir/rule.py"))``
    is ``"sub.dir.rule"``. Returns None (and logs a warning) when *path* is
    not under *root* or has no file stem.
    """
    try:
        relative = Path(path).relative_to(root)
    except ValueError:
        logger.warning("Rule path '%s' is not a subpath of the common parent '%s'", path, root)
        return None

    stem = relative.stem if relative.name else ""
    if not stem:
        logger.warning("Rule path '%s' has no valid file stem", path)
        return None

    segments = [*relative.parent.parts, stem]
    joined = "/".join(segments)
    return joined.replace("\\", "/").replace("/", MODULE_SEPARATOR)
