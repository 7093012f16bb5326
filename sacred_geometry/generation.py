"""
Generation state - the hue pair, shape kind and pattern currently on screen
"""

import logging
import random
from dataclasses import dataclass, replace

from sacred_geometry.patterns import PatternName, UnknownPattern, registered_patterns, resolve
from sacred_geometry.shapes import SHAPE_KINDS, ShapeKind, shape_kind_by_name

logger = logging.getLogger(__name__)


def complementary_hue(hue):
    return (hue + 180) % 360


def hash_to_seed(text):
    """Deterministic seed from a string (31-multiplier hash, 32-bit wrap)"""
    h = 0
    for ch in text:
        h = (31 * h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def make_rng(seed=None):
    """random.Random from an int seed, a string seed, or system entropy"""
    if isinstance(seed, str):
        seed = hash_to_seed(seed)
    return random.Random(seed)


@dataclass(frozen=True)
class GenerationState:
    base_hue: float
    complementary_hue: float
    shape_kind: ShapeKind
    pattern_name: PatternName

    @classmethod
    def from_hue(cls, base_hue, shape_kind, pattern_name):
        base_hue = base_hue % 360
        return cls(base_hue, complementary_hue(base_hue), shape_kind, pattern_name)


class GenerationStateController:
    """Picks hues, shape kinds and patterns, never repeating the active ones"""

    def __init__(self, patterns=None, shapes=SHAPE_KINDS, rng=None):
        if patterns is None:
            patterns = registered_patterns()
        # Only registered recipes may be drawn
        self.patterns = tuple(resolve(name).name for name in patterns)
        self.shapes = tuple(shape_kind_by_name(kind) for kind in shapes)
        self.rng = rng if rng is not None else random.Random()

        if len(self.patterns) < 2:
            raise ValueError("Pattern pool needs at least two patterns")
        if len(self.shapes) < 2:
            raise ValueError("Shape pool needs at least two shape kinds")

    def _pick_other(self, pool, current):
        choices = [item for item in pool if item != current]
        return self.rng.choice(choices)

    def initial_state(self):
        return GenerationState.from_hue(
            self.rng.uniform(0, 360),
            self.rng.choice(self.shapes),
            self.rng.choice(self.patterns),
        )

    def regenerate(self, state):
        """New hue pair plus a shape and pattern different from the current ones"""
        new_state = GenerationState.from_hue(
            self.rng.uniform(0, 360),
            self._pick_other(self.shapes, state.shape_kind),
            self._pick_other(self.patterns, state.pattern_name),
        )
        logger.debug("Regenerated: hue=%.1f shape=%s pattern=%s",
                     new_state.base_hue, new_state.shape_kind, new_state.pattern_name)
        return new_state

    def with_shape_kind(self, state, kind):
        return replace(state, shape_kind=shape_kind_by_name(kind))

    def with_pattern_name(self, state, name):
        recipe = resolve(name)
        if recipe.name not in self.patterns:
            raise UnknownPattern(f"Pattern {recipe.name.value!r} is not available here")
        return replace(state, pattern_name=recipe.name)
