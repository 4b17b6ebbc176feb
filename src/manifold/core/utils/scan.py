"""Best-effort scanning: yield what parses, skip what doesn't"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, TypeVar

from manifold.core.errors import ProjectError


T = TypeVar("T")

logger = logging.getLogger(__name__)


def iter_parsed(paths: Iterable[Path], parse: Callable[[Path], T]) -> Iterator[T]:
    """Lazily apply parse to each path, discarding entries that raise a ProjectError."""
    for path in paths:
        try:
            yield parse(path)
        except ProjectError as e:
            logger.debug("Skipping %s: %s", path, e)


def json_files(directory: Path) -> list[Path]:
    """Sorted *.json files directly under directory."""
    return sorted(p for p in directory.iterdir() if p.suffix == '.json' and p.is_file())
