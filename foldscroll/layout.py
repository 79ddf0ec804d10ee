"""In-memory fold layouts usable as a ``FoldHost``.

Editors normally answer fold queries themselves. ``LayoutRegistry`` answers
them from static descriptions instead, which the command line and the test
suite use. Regions must nest like editor folds do: two regions either do not
overlap or one contains the other.
"""

from __future__ import annotations

import re
from collections.abc import Hashable, Iterable
from dataclasses import dataclass

from .host import FoldHost, InvalidSurface
from .types import FoldRange

_FOLD_SPEC_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*(?::\s*(open|closed)\s*)?$")


@dataclass(frozen=True)
class FoldRegion:
    """One fold region and whether it is currently closed."""

    start: int
    end: int
    closed: bool = True

    def contains(self, line: int) -> bool:
        return self.start <= line <= self.end

    def encloses(self, other: FoldRegion) -> bool:
        return self.start <= other.start and other.end <= self.end


def parse_fold_spec(text: str) -> FoldRegion:
    """Parse ``"A-B"`` or ``"A-B:open"`` / ``"A-B:closed"`` into a region."""
    match = _FOLD_SPEC_RE.match(text)
    if match is None:
        raise ValueError(f"invalid fold spec: {text!r} (expected START-END[:open|closed])")
    start, end = int(match.group(1)), int(match.group(2))
    return FoldRegion(start, end, closed=match.group(3) != "open")


class FoldLayout:
    """Validated line count plus nested fold regions for one buffer."""

    def __init__(self, total_lines: int, folds: Iterable[FoldRegion] = ()) -> None:
        if total_lines < 1:
            raise ValueError("a buffer always has at least one line")
        self.total_lines = total_lines
        self.folds = tuple(sorted(folds, key=lambda fold: (fold.start, -fold.end)))
        self._validate()

    def _validate(self) -> None:
        for fold in self.folds:
            if fold.start < 1 or fold.end > self.total_lines or fold.start > fold.end:
                raise ValueError(
                    f"fold {fold.start}-{fold.end} outside buffer of {self.total_lines} lines"
                )
        for idx, outer in enumerate(self.folds):
            for inner in self.folds[idx + 1:]:
                if inner.start > outer.end:
                    break
                if not outer.encloses(inner):
                    raise ValueError(
                        f"folds {outer.start}-{outer.end} and {inner.start}-{inner.end} overlap without nesting"
                    )

    def closed_fold_at(self, line: int) -> FoldRange | None:
        """Return the outermost closed fold containing ``line``."""
        for fold in self.folds:
            if fold.start > line:
                break
            if fold.closed and fold.contains(line):
                return FoldRange(fold.start, fold.end)
        return None

    def next_fold_start(self, line: int) -> int | None:
        """Return the first visible fold start after ``line``.

        Regions hidden inside an enclosing closed fold are not visible.
        """
        for fold in self.folds:
            if fold.start <= line:
                continue
            enclosing = self.closed_fold_at(fold.start)
            if enclosing is not None and enclosing.start < fold.start:
                continue
            return fold.start
        return None


@dataclass(frozen=True, eq=False)
class ScratchView:
    """Isolated traversal view over one surface's layout."""

    surface: Hashable
    layout: FoldLayout


class LayoutRegistry:
    """Surface-to-layout table exposing the ``FoldHost`` callbacks."""

    def __init__(self) -> None:
        self._layouts: dict[Hashable, FoldLayout] = {}
        self.active_views: list[ScratchView] = []

    def set_layout(self, surface: Hashable, layout: FoldLayout) -> None:
        self._layouts[surface] = layout

    def remove(self, surface: Hashable) -> None:
        self._layouts.pop(surface, None)

    def layout_for(self, surface: Hashable) -> FoldLayout:
        try:
            return self._layouts[surface]
        except KeyError:
            raise InvalidSurface(f"unknown surface: {surface!r}") from None

    def acquire_scratch(self, surface: Hashable) -> ScratchView:
        view = ScratchView(surface, self.layout_for(surface))
        self.active_views.append(view)
        return view

    def release_scratch(self, view: ScratchView) -> None:
        self.active_views.remove(view)

    def as_host(self) -> FoldHost:
        return FoldHost(
            closed_fold_at=lambda view, line: view.layout.closed_fold_at(line),
            next_fold_start=lambda view, line: view.layout.next_fold_start(line),
            total_lines=lambda view: view.layout.total_lines,
            acquire_scratch=self.acquire_scratch,
            release_scratch=self.release_scratch,
        )
