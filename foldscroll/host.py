"""Host collaborator contract for fold-aware traversal.

The core never touches an editor directly. Embedders supply a ``FoldHost``
whose callbacks answer fold and line-count questions for a scratch view of a
display surface.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass
from typing import Any

from .types import FoldRange

logger = logging.getLogger(__name__)


class InvalidSurface(LookupError):
    """Raised by hosts when a surface id does not name an open surface."""


def _identity_view(surface: Hashable) -> Any:
    return surface


def _release_nothing(view: Any) -> None:
    return None


@dataclass(frozen=True)
class FoldHost:
    """Injected fold/line queries plus scratch-view lifecycle.

    ``closed_fold_at`` and ``next_fold_start`` play the fold-oracle role,
    ``total_lines`` the line-source role. ``acquire_scratch`` returns a view
    mirroring the surface's buffer and folds; every query receives that view.
    The default scratch callbacks hand the surface itself back, which suits
    hosts whose queries have no cursor side effects.
    """

    closed_fold_at: Callable[[Any, int], FoldRange | None]
    next_fold_start: Callable[[Any, int], int | None]
    total_lines: Callable[[Any], int]
    acquire_scratch: Callable[[Hashable], Any] = _identity_view
    release_scratch: Callable[[Any], None] = _release_nothing


@contextlib.contextmanager
def scratch_view(host: FoldHost, surface: Hashable) -> Iterator[Any]:
    """Acquire a scratch view for ``surface`` and always release it."""
    view = host.acquire_scratch(surface)
    logger.debug("acquired scratch view for surface %r", surface)
    try:
        yield view
    finally:
        host.release_scratch(view)
        logger.debug("released scratch view for surface %r", surface)
