# ledgerdocs/styling/common/page_canvas.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Union

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas


@dataclass(frozen=True)
class TextOp:
    text: str
    x: float
    y: float
    font: str
    size: float
    color: colors.Color


@dataclass(frozen=True)
class RectOp:
    x: float
    y: float
    w: float
    h: float
    color: colors.Color
    border: colors.Color | None = None
    border_w: float = 0.0


@dataclass(frozen=True)
class LineOp:
    x1: float
    y1: float
    x2: float
    y2: float
    color: colors.Color
    thickness: float


@dataclass(frozen=True)
class ImageOp:
    image: ImageReader
    x: float
    y: float
    w: float
    h: float


DrawOp = Union[TextOp, RectOp, LineOp, ImageOp]


@dataclass
class PageCanvas:
    """
    Fixed-size drawing surface with a bottom-left origin.

    Draw calls are recorded and replayed onto a reportlab canvas when the
    document is serialized. Nothing is clipped or bounds-checked here.
    """
    width: float
    height: float
    ops: List[DrawOp] = field(default_factory=list)

    def draw_text(self, text: str, x: float, y: float, font: str, size: float, color=colors.black) -> None:
        self.ops.append(TextOp(text=text, x=x, y=y, font=font, size=size, color=color))

    def draw_rect(self, x: float, y: float, w: float, h: float, color, *, border=None, border_w: float = 0.0) -> None:
        self.ops.append(RectOp(x=x, y=y, w=w, h=h, color=color, border=border, border_w=border_w))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color=colors.black, thickness: float = 1.0) -> None:
        self.ops.append(LineOp(x1=x1, y1=y1, x2=x2, y2=y2, color=color, thickness=thickness))

    def draw_image(self, image: ImageReader, x: float, y: float, w: float, h: float) -> None:
        self.ops.append(ImageOp(image=image, x=x, y=y, w=w, h=h))

    def texts(self) -> Iterator[TextOp]:
        return (op for op in self.ops if isinstance(op, TextOp))

    def replay(self, c: canvas.Canvas) -> None:
        for op in self.ops:
            if isinstance(op, TextOp):
                c.setFillColor(op.color)
                c.setFont(op.font, op.size)
                c.drawString(op.x, op.y, op.text)
            elif isinstance(op, RectOp):
                c.setFillColor(op.color)
                if op.border is not None and op.border_w > 0:
                    c.setStrokeColor(op.border)
                    c.setLineWidth(op.border_w)
                    c.rect(op.x, op.y, op.w, op.h, stroke=1, fill=1)
                else:
                    c.rect(op.x, op.y, op.w, op.h, stroke=0, fill=1)
            elif isinstance(op, LineOp):
                c.setStrokeColor(op.color)
                c.setLineWidth(op.thickness)
                c.line(op.x1, op.y1, op.x2, op.y2)
            elif isinstance(op, ImageOp):
                c.drawImage(op.image, op.x, op.y, width=op.w, height=op.h, preserveAspectRatio=True, mask="auto")

        c.setFillColor(colors.black)
        c.setStrokeColor(colors.black)
