"""
Scatter Commands
================
Host-facing operations built on the scatter engine.

Why is this file needed?
------------------------
1. Validation: Every option is checked before any point is sampled, so a
   failing command leaves the host document untouched.
2. Variation: Random rotation, scale and drop of the placed blocks live here,
   outside the pure engine.

Classes:
    ScatterOptions: User choices for one ScatterBlocks run.
    ScatterResult: Commands plus requested/emitted counts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np

from blockscatter import config
from blockscatter.analysis.distribution import assign
from blockscatter.analysis.sampling import make_rng
from blockscatter.analysis.scatter import scatter, validate_scatter_input
from blockscatter.errors import InvalidConfiguration, ScatterError

if TYPE_CHECKING:
    from blockscatter.model.mesh import TriangleMesh
    from blockscatter.model.placement import Item, PlacementCommand

logger = logging.getLogger(__name__)


@dataclass
class ScatterOptions:
    """
    Attributes:
        target_count: Number of blocks to scatter.
        scale: Random scale multiplier, 0.0 for no scaling.
        random_rotation: Rotate every block by a random angle around Z.
        seed: Seed for reproducible runs.
        max_target_count: Upper limit for target_count.
    """
    target_count: int = config.DEFAULT_TARGET_COUNT
    scale: float = 0.0
    random_rotation: bool = False
    seed: Optional[int] = None
    max_target_count: int = config.MAX_TARGET_COUNT

    def validate(self) -> None:
        if self.target_count <= 0:
            raise InvalidConfiguration(f"Number of blocks must be positive, got {self.target_count}.")
        if self.target_count > self.max_target_count:
            raise InvalidConfiguration(
                f"Number of blocks {self.target_count} exceeds the limit of {self.max_target_count}."
            )
        if not self.scale >= 0.0:
            raise InvalidConfiguration(f"Scale multiplier must be zero or positive, got {self.scale}.")


@dataclass
class ScatterResult:
    commands: list[PlacementCommand] = field(default_factory=list)
    requested_count: int = 0

    @property
    def emitted_count(self) -> int:
        return len(self.commands)


def scatter_blocks(
    mesh: TriangleMesh,
    items: Sequence[Item],
    options: ScatterOptions,
    rng: Optional[np.random.Generator] = None,
) -> ScatterResult:
    """
    Scatter copies of the items over the mesh.

    Args:
        mesh: Triangulated target surface.
        items: Blocks to scatter; points are split evenly between them.
        options: Count and variation settings.
        rng: Random generator; built from ``options.seed`` when omitted.

    Returns:
        ScatterResult with one command per emitted point.
    """
    try:
        options.validate()
        if not items:
            raise InvalidConfiguration("Select at least one block to scatter.")
        validate_scatter_input(mesh, options.target_count)

        rng = rng if rng is not None else make_rng(options.seed)

        points = scatter(mesh, options.target_count, rng)
        commands = assign(points, items, rng)

        if options.scale:
            commands = random_scale(commands, options.scale, rng)
        if options.random_rotation:
            commands = random_rotate(commands, rng)

    except ScatterError:
        logger.exception("Failed to scatter blocks")
        raise

    logger.info(
        f"ScatterBlocks: {len(commands)} blocks from {len(items)} definitions "
        f"(requested {options.target_count})."
    )
    return ScatterResult(commands=commands, requested_count=options.target_count)


def random_rotate(
    commands: Sequence[PlacementCommand],
    rng: Optional[np.random.Generator] = None,
) -> list[PlacementCommand]:
    """
    Give every placement a random whole-degree rotation around Z.

    Angles are drawn from ``config.ROTATION_RANGE_DEG`` (upper bound excluded)
    and added to any rotation already present.
    """
    rng = rng if rng is not None else make_rng()
    low, high = config.ROTATION_RANGE_DEG
    angles = rng.integers(low, high, size=len(commands))
    return [
        command.with_changes(rotation_deg=command.rotation_deg + float(angle))
        for command, angle in zip(commands, angles)
    ]


def random_scale(
    commands: Sequence[PlacementCommand],
    scale: float,
    rng: Optional[np.random.Generator] = None,
) -> list[PlacementCommand]:
    """
    Multiply each placement's scale by a random factor between 1 and ``scale``.

    ``scale == 0`` means no scaling and returns the commands unchanged.
    """
    if not scale >= 0.0:
        raise InvalidConfiguration(f"Scale multiplier must be zero or positive, got {scale}.")
    if scale == 0.0:
        return list(commands)

    rng = rng if rng is not None else make_rng()
    factors = rng.uniform(min(1.0, scale), max(1.0, scale), size=len(commands))
    return [
        command.with_changes(scale=command.scale * float(factor))
        for command, factor in zip(commands, factors)
    ]


def random_drop(
    commands: Sequence[PlacementCommand],
    max_drop: float,
    rng: Optional[np.random.Generator] = None,
) -> list[PlacementCommand]:
    """
    Lower each placement along -Z by a random distance in [0, |max_drop|).
    """
    rng = rng if rng is not None else make_rng()
    drops = rng.random(len(commands)) * abs(max_drop)

    dropped = []
    for command, drop in zip(commands, drops):
        target = command.target.copy()
        target[2] -= drop
        logger.debug(f"Dropped '{command.item.name}' by {drop:.4g}")
        dropped.append(command.with_changes(target=target))
    return dropped
