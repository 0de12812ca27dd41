"""
Geometric Primitives for the scatter pipeline.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Union, TYPE_CHECKING
import numpy as np

from blockscatter.model.geometry_utils import triangle_area

if TYPE_CHECKING:
    import numpy.typing as npt

PointLike = Union[Sequence[float], "npt.NDArray[np.float64]"]


def as_point(value: PointLike) -> npt.NDArray[np.float64]:
    """
    Convert a 2D or 3D coordinate into a read-only float64 array of length 3.

    2D coordinates get z = 0.0.
    """
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape == (2,):
        arr = np.append(arr, 0.0)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 2D or 3D point, got shape {arr.shape}.")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Triangle:
    """
    An ordered triple of 3D points.

    Each triangle owns a private copy of its vertices, so the source mesh may
    be discarded once the triangles are extracted.
    """
    a: npt.NDArray[np.float64]
    b: npt.NDArray[np.float64]
    c: npt.NDArray[np.float64]

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to store the copies
        object.__setattr__(self, "a", as_point(self.a))
        object.__setattr__(self, "b", as_point(self.b))
        object.__setattr__(self, "c", as_point(self.c))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(a={self.a.tolist()}, b={self.b.tolist()}, c={self.c.tolist()})"

    @property
    def area(self) -> float:
        return triangle_area(self.a, self.b, self.c)

    @property
    def vertices(self) -> npt.NDArray[np.float64]:
        """Vertices stacked into a (3, 3) array."""
        return np.vstack((self.a, self.b, self.c))

    @property
    def centroid(self) -> npt.NDArray[np.float64]:
        return (self.a + self.b + self.c) / 3.0
