"""
Items and Placement Commands
============================
The output side of the scatter pipeline.

Classes:
    Item: A reusable template (e.g. a block definition) owned by the host.
    PlacementCommand: "Place a new copy of this item at that point".
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional, TYPE_CHECKING

import numpy as np

from blockscatter.model.geometry_primitives import PointLike, as_point

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True, eq=False)
class Item:
    """
    External placement target. The scatter engine only reads its origin.

    Attributes:
        name: Display name (block definition name in the host).
        origin: Reference point that is moved onto each sample point.
        ref: Opaque host handle, passed through untouched.
    """
    name: str
    origin: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    ref: Optional[Any] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_point(self.origin))


@dataclass(frozen=True, eq=False)
class PlacementCommand:
    """
    A request to spawn a new instance of ``item`` with its origin at ``target``.

    The item itself is never moved; the host copies it and applies
    :attr:`translation`, then rotates by ``rotation_deg`` around +Z and scales
    by ``scale``, both about ``target``.
    """
    item: Item
    target: npt.NDArray[np.float64]
    rotation_deg: float = 0.0
    scale: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "target", as_point(self.target))

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(item={self.item.name!r}, target={self.target.tolist()}, "
            f"rotation_deg={self.rotation_deg}, scale={self.scale})"
        )

    @property
    def translation(self) -> npt.NDArray[np.float64]:
        """Offset that moves the item origin onto the target."""
        return self.target - self.item.origin

    def with_changes(self, **changes: Any) -> PlacementCommand:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    def transform_matrix(self) -> npt.NDArray[np.float64]:
        """
        4x4 homogeneous transform taking the item to its placed copy.

        [M] = T(target) R_z(rotation) S(scale) T(-origin)
        """
        angle = np.deg2rad(self.rotation_deg)
        cos_a, sin_a = np.cos(angle), np.sin(angle)
        linear = self.scale * np.array([
            [cos_a, -sin_a, 0.0],
            [sin_a, cos_a, 0.0],
            [0.0, 0.0, 1.0],
        ])
        matrix = np.eye(4)
        matrix[:3, :3] = linear
        matrix[:3, 3] = self.target - linear @ self.item.origin
        return matrix

    def to_dict(self) -> dict[str, Any]:
        return {
            "item": self.item.name,
            "target": self.target.tolist(),
            "translation": self.translation.tolist(),
            "rotation_deg": float(self.rotation_deg),
            "scale": float(self.scale),
        }
