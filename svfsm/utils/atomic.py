"""Atomic writes for generated HDL.

Output is staged in a hidden ``.<name>.*.tmp`` sibling and moved over the
target with ``os.replace`` once complete, so an existing ``.sv`` file is
either left alone or fully replaced.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, TextIO

from svfsm.utils.logging import get_logger

logger = get_logger("utils.atomic")


class AtomicWriteError(Exception):
    """The target could not be written; any previous content is intact."""


def _discard(staged: Path) -> None:
    try:
        staged.unlink()
    except FileNotFoundError:
        pass


@contextmanager
def atomic_write(path: Path, encoding: str = "utf-8") -> Iterator[TextIO]:
    """
    Open a staging file that replaces ``path`` on a clean exit.

    Missing parent directories are created. Newlines are written as given,
    so the file matches the rendered text byte for byte.

    Raises:
        AtomicWriteError: If staging, writing or the final rename fails

    Example:
        with atomic_write(Path("rtl/fsm.sv")) as f:
            f.write(code)
    """
    target = Path(path)
    staged = None

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            newline="",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            staged = Path(handle.name)
            yield handle
        os.replace(staged, target)
    except Exception as e:
        if staged is not None:
            _discard(staged)
        logger.error("output_write_failed", path=str(target), error=str(e))
        raise AtomicWriteError(f"Cannot write {target}: {e}") from e

    logger.debug("output_replaced", path=str(target))


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Atomically replace ``path`` with ``content``."""
    with atomic_write(path, encoding=encoding) as handle:
        handle.write(content)
