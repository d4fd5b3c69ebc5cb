"""2-D affine transforms for the drawing surface.

Matrices use the canvas convention::

    | a  c  e |
    | b  d  f |
    | 0  0  1 |

so that ``x' = a*x + c*y + e`` and ``y' = b*x + d*y + f``. Chained calls
such as ``t.translate(...).scale(...)`` post-multiply, meaning the last
operation in the chain is applied to points first.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Optional, Tuple

from .types import ViewParams
from .config import CANVAS_SIZE


@dataclass(frozen=True)
class Affine:
    """Immutable 2-D affine transform."""
    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> Affine:
        return cls()

    @classmethod
    def translation(cls, tx: float, ty: float) -> Affine:
        return cls(1.0, 0.0, 0.0, 1.0, tx, ty)

    @classmethod
    def scaling(cls, sx: float, sy: Optional[float] = None) -> Affine:
        return cls(sx, 0.0, 0.0, sx if sy is None else sy, 0.0, 0.0)

    @classmethod
    def rotation(cls, theta: float) -> Affine:
        cs, sn = math.cos(theta), math.sin(theta)
        return cls(cs, sn, -sn, cs, 0.0, 0.0)

    def multiply(self, other: Affine) -> Affine:
        """Return self * other (other is applied to points first)."""
        return Affine(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def translate(self, tx: float, ty: float) -> Affine:
        return self.multiply(Affine.translation(tx, ty))

    def scale(self, sx: float, sy: Optional[float] = None) -> Affine:
        return self.multiply(Affine.scaling(sx, sy))

    def rotate(self, theta: float) -> Affine:
        return self.multiply(Affine.rotation(theta))

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def inverse(self) -> Affine:
        """Inverse transform. Raises ZeroDivisionError if singular."""
        det = self.determinant
        if det == 0:
            raise ZeroDivisionError("singular transform")
        ia = self.d / det
        ib = -self.b / det
        ic = -self.c / det
        id_ = self.a / det
        return Affine(
            a=ia, b=ib, c=ic, d=id_,
            e=-(ia * self.e + ic * self.f),
            f=-(ib * self.e + id_ * self.f),
        )

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        """Map a point through the transform."""
        return (self.a * x + self.c * y + self.e,
                self.b * x + self.d * y + self.f)

    def uniform_scale(self) -> float:
        """Average linear scale factor (exact for similarity transforms)."""
        return math.sqrt(abs(self.determinant))

    def pil_affine_data(self) -> Tuple[float, float, float, float, float, float]:
        """Coefficients for ``Image.transform(..., Image.AFFINE, data)``.

        Pillow maps output pixels back to input pixels, so the data is the
        inverse of this transform in Pillow's row order.
        """
        inv = self.inverse()
        return (inv.a, inv.c, inv.e, inv.b, inv.d, inv.f)


def view_transform(view: ViewParams, canvas_size: float = CANVAS_SIZE) -> Affine:
    """Pan/zoom about the canvas centre: translate, scale, translate back."""
    cx = cy = canvas_size / 2
    return (Affine.identity()
            .translate(cx + view.offx, cy + view.offy)
            .scale(view.scale)
            .translate(-cx, -cy))


def placement_transform(src_w: float, src_h: float,
                        dx: float, dy: float, dw: float, dh: float) -> Affine:
    """Map the source rectangle (0, 0, src_w, src_h) onto (dx, dy, dw, dh)."""
    return Affine.translation(dx, dy).scale(dw / src_w, dh / src_h)
