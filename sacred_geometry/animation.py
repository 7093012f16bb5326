"""
Animation scheduler - growth progress and timed auto-regeneration

All times are milliseconds from an injected clock. The scheduler never
mutates state; every call returns fresh snapshots.
"""

import logging
from dataclasses import dataclass, replace
from typing import NamedTuple, Tuple

from sacred_geometry.generation import GenerationState
from sacred_geometry.patterns import PatternName
from sacred_geometry.shapes import ShapeKind

logger = logging.getLogger(__name__)

ANIMATION_DURATION_MS = 500
AUTO_REGEN_INTERVAL_MS = 2000
CELL_COUNT = 4


def sample_distinct(universe, k, rng):
    """k distinct elements of `universe`, uniformly (Fisher-Yates shuffle)"""
    pool = list(universe)
    if k > len(pool):
        raise ValueError(f"Cannot draw {k} distinct items from {len(pool)}")
    rng.shuffle(pool)
    return tuple(pool[:k])


def growth_progress(now, start, duration):
    if duration <= 0:
        return 1.0
    return min(1.0, max(0.0, (now - start) / duration))


@dataclass(frozen=True)
class AnimationState:
    progress: float
    animation_start_time: float
    last_regen_time: float
    cell_patterns: Tuple[PatternName, ...]
    cell_shapes: Tuple[ShapeKind, ...]

    @property
    def settled(self):
        return self.progress >= 1.0


class Tick(NamedTuple):
    generation: GenerationState
    animation: AnimationState
    regenerated: bool


class AnimationScheduler:
    """Growing -> Settled -> Growing(0) on every regeneration"""

    def __init__(self, controller, duration=ANIMATION_DURATION_MS,
                 interval=AUTO_REGEN_INTERVAL_MS, cells=CELL_COUNT):
        self.controller = controller
        self.duration = duration
        self.interval = interval
        self.cells = cells

    def start(self, now):
        """First generation and animation state"""
        return self.regenerate(self.controller.initial_state(), now)

    def regenerate(self, generation, now):
        """New hue pair and fresh duplicate-free cell sets; restarts growth"""
        rng = self.controller.rng
        new_generation = self.controller.regenerate(generation)
        animation = AnimationState(
            progress=0.0,
            animation_start_time=now,
            last_regen_time=now,
            cell_patterns=sample_distinct(self.controller.patterns, self.cells, rng),
            cell_shapes=sample_distinct(self.controller.shapes, self.cells, rng),
        )
        logger.info("Regenerated at %.0fms: patterns=%s",
                    now, ', '.join(p.value for p in animation.cell_patterns))
        return new_generation, animation

    def progress(self, animation, now):
        return growth_progress(now, animation.animation_start_time, self.duration)

    def tick(self, generation, animation, now):
        """Advance one frame. Regenerates at most once per call."""
        regenerated = False
        if now - animation.last_regen_time > self.interval:
            generation, animation = self.regenerate(generation, now)
            regenerated = True

        animation = replace(animation, progress=self.progress(animation, now))
        return Tick(generation, animation, regenerated)
