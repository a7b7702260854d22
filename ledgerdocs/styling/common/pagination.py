# ledgerdocs/styling/common/pagination.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ledgerdocs.styling.base import PageSpec
from ledgerdocs.styling.common.page_canvas import PageCanvas

# Draws the fixed band at the top of a fresh page and returns the y where
# content may start.
HeaderBand = Callable[[PageCanvas], float]


@dataclass
class RenderState:
    pages: List[PageCanvas] = field(default_factory=list)
    page_index: int = -1
    cursor_y: float = 0.0


class Paginator:
    """
    Owns the vertical cursor for one render call.

    Every block asks `ensure_space(height)` before drawing and `advance(height)`
    afterwards; a page break is the only way the cursor moves up again.
    """

    def __init__(self, ps: PageSpec, header_band: Optional[HeaderBand] = None, *, content_gap: float = 0.0):
        self.ps = ps
        self.header_band = header_band
        self.content_gap = content_gap
        self.state = RenderState()
        self._content_top = ps.h - ps.margin_t

    @property
    def bottom(self) -> float:
        return self.ps.margin_b

    @property
    def page(self) -> PageCanvas:
        if not self.state.pages:
            self.new_page()
        return self.state.pages[self.state.page_index]

    @property
    def pages(self) -> List[PageCanvas]:
        return self.state.pages

    @property
    def y(self) -> float:
        return self.state.cursor_y

    def remaining(self) -> float:
        return self.state.cursor_y - self.bottom

    def page_capacity(self) -> float:
        """Usable height on a fresh page, below the header band."""
        if not self.state.pages:
            self.new_page()
        return self._content_top - self.bottom

    def new_page(self) -> PageCanvas:
        page = PageCanvas(width=self.ps.w, height=self.ps.h)
        self.state.pages.append(page)
        self.state.page_index = len(self.state.pages) - 1

        top = self.ps.h - self.ps.margin_t
        if self.header_band is not None:
            top = self.header_band(page)
        self._content_top = top - self.content_gap
        self.state.cursor_y = self._content_top
        return page

    def ensure_space(self, height: float) -> bool:
        """Returns True when a page break happened."""
        if not self.state.pages:
            self.new_page()
        if self.state.cursor_y - height < self.bottom:
            self.new_page()
            return True
        return False

    def advance(self, delta: float) -> None:
        self.state.cursor_y -= delta
