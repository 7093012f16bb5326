"""
Pattern catalog - the fixed table of named sacred geometry recipes

Every recipe is a list of placement specs expressed as fractions of a single
base size, so patterns draw the same at any resolution.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Optional, Tuple

from sacred_geometry.metatron import draw_cube_edges
from sacred_geometry.placement import ORIGIN, PlacementSpec, expand
from sacred_geometry.shapes import ShapeRenderer

logger = logging.getLogger(__name__)


class UnknownPattern(LookupError):
    """Raised when a pattern name has no recipe in the catalog"""


class PatternName(str, Enum):
    VESICA_PISCIS = 'VesicaPiscis'
    SEED_OF_LIFE = 'SeedOfLife'
    EGG_OF_LIFE = 'EggOfLife'
    FLOWER_OF_LIFE = 'FlowerOfLife'
    FRUIT_OF_LIFE = 'FruitOfLife'
    METATRONS_CUBE = 'MetatronsCube'
    # Named in one selection pool but never given a recipe
    TREE_OF_LIFE = 'TreeOfLife'

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class PatternRecipe:
    name: PatternName
    placements: Tuple[PlacementSpec, ...]
    extra: Optional[Callable] = None

    def placements_for(self, shape):
        """Placements with the active shape filled in where none is fixed"""
        return tuple(spec if spec.shape is not None else spec.with_shape(shape)
                     for spec in self.placements)


# Fruit of Life rings start at 30 degrees so Metatron's vertices sit on them
_FRUIT_PLACEMENTS = (
    PlacementSpec(size_fraction=1 / 5),
    PlacementSpec(count=6, radius_fraction=2 / 5, size_fraction=1 / 5, start_angle=30),
    PlacementSpec(count=6, radius_fraction=4 / 5, size_fraction=1 / 5, start_angle=30),
)

_RECIPES = (
    PatternRecipe(PatternName.VESICA_PISCIS, (
        PlacementSpec(size_fraction=1),
        PlacementSpec(size_fraction=1 / 2),
        PlacementSpec(radius_fraction=1 / 4, size_fraction=3 / 4, angle_offset=90),
        PlacementSpec(radius_fraction=1 / 4, size_fraction=3 / 4, angle_offset=270),
    )),
    PatternRecipe(PatternName.SEED_OF_LIFE, (
        PlacementSpec(size_fraction=1 / 2),
        PlacementSpec(count=6, radius_fraction=1 / 2, size_fraction=1 / 2),
    )),
    PatternRecipe(PatternName.EGG_OF_LIFE, (
        PlacementSpec(size_fraction=1 / 3),
        PlacementSpec(count=6, radius_fraction=2 / 3, size_fraction=1 / 3),
    )),
    PatternRecipe(PatternName.FLOWER_OF_LIFE, (
        PlacementSpec(size_fraction=1),
        PlacementSpec(size_fraction=1 / 3),
        PlacementSpec(count=6, radius_fraction=1 / 3, size_fraction=1 / 3),
        PlacementSpec(count=12, radius_fraction=2 / 3, size_fraction=1 / 3),
    )),
    PatternRecipe(PatternName.FRUIT_OF_LIFE, _FRUIT_PLACEMENTS),
    PatternRecipe(PatternName.METATRONS_CUBE, _FRUIT_PLACEMENTS, extra=draw_cube_edges),
)

PATTERN_CATALOG = MappingProxyType({recipe.name: recipe for recipe in _RECIPES})


def _coerce_name(name):
    if isinstance(name, PatternName):
        return name
    try:
        return PatternName(str(name))
    except ValueError:
        raise UnknownPattern(f"Unknown pattern: {name!r}") from None


def resolve(name):
    """Return the recipe registered under `name`"""
    key = _coerce_name(name)
    try:
        return PATTERN_CATALOG[key]
    except KeyError:
        raise UnknownPattern(f"No recipe registered for pattern {key.value!r}") from None


def registered_patterns():
    """Registered pattern names in catalog order"""
    return tuple(PATTERN_CATALOG)


def display_name(name):
    """Human readable pattern name, e.g. 'SeedOfLife' -> 'Seed Of Life'"""
    value = name.value if isinstance(name, PatternName) else str(name)
    return re.sub(r'([A-Z])', r' \1', value).strip()


def draw_pattern(canvas, name, shape, size, origin=ORIGIN):
    """Draw pattern `name` built from `shape` at base `size` around `origin`.

    Returns:
        Number of shapes drawn (decoration lines not included)
    """
    recipe = resolve(name)
    renderer = ShapeRenderer(canvas)
    drawn = 0

    for spec in recipe.placements_for(shape):
        for placement in expand(spec, size, origin):
            renderer.draw(spec.shape, placement.center, placement.size, placement.rotation)
            drawn += 1

    if recipe.extra is not None:
        recipe.extra(canvas, size, origin)

    logger.debug("Drew %s with %s: %d shapes", recipe.name.value, shape, drawn)
    return drawn
