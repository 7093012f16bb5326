"""
Sacred geometry execution engine - loads and runs sketch scripts

A sketch is a directory containing main.py with a `draw(canvas, ctx)`
function and optionally:
    setup(canvas, ctx)  called before the first frame
    PATTERN_POOL        patterns the sketch may select from
    ANIMATED            True to drive the growth animation and auto-regeneration
"""

import importlib.util
import logging
import os
import threading
import time
import traceback

from sacred_geometry.animation import ANIMATION_DURATION_MS, AUTO_REGEN_INTERVAL_MS, AnimationScheduler
from sacred_geometry.generation import GenerationStateController, make_rng
from sacred_geometry.patterns import display_name
from sacred_geometry.pil_canvas import Canvas

logger = logging.getLogger(__name__)

STROKE_WEIGHT_FACTOR = 0.01


def monotonic_ms():
    return time.monotonic() * 1000


class SketchContext:
    """State handed to sketches every frame.

    Sketches read from it and never mutate it; the engine swaps in new
    generation/animation snapshots between frames.
    """
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.now = 0.0
        self.frame_count = 0
        self.sketch = "unknown"

        self.generation = None
        self.animation = None

        self.stroke_weight = 1.0

    @property
    def progress(self):
        """Growth progress, 1.0 for sketches that do not animate"""
        return self.animation.progress if self.animation is not None else 1.0


class SacredGeometryEngine:
    def __init__(self, width=1280, height=720, clock=None, seed=None,
                 animation_duration=ANIMATION_DURATION_MS, auto_regen_interval=AUTO_REGEN_INTERVAL_MS):
        self.canvas = Canvas((width, height))
        self.ctx = SketchContext(width, height)
        self.clock = clock or monotonic_ms
        self.rng = make_rng(seed)
        self.animation_duration = animation_duration
        self.auto_regen_interval = auto_regen_interval

        self.current_sketch = None
        self.setup_func = None
        self.draw_func = None
        self.is_initialized = False

        self.controller = None
        self.scheduler = None

        # The render loop runs on its own thread; socket handlers mutate state
        self._lock = threading.RLock()

        self._apply_stroke_weight()

    def _apply_stroke_weight(self):
        self.ctx.stroke_weight = min(self.ctx.width, self.ctx.height) * STROKE_WEIGHT_FACTOR
        self.canvas.set_stroke_weight(self.ctx.stroke_weight)

    def load_sketch(self, sketch_path):
        """Load a sketch from a directory containing main.py"""
        try:
            main_py_path = os.path.join(sketch_path, 'main.py')
            if not os.path.exists(main_py_path):
                raise FileNotFoundError(f"main.py not found in {sketch_path}")

            spec = importlib.util.spec_from_file_location("sacred_sketch", main_py_path)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)

            if not hasattr(module, 'draw'):
                raise AttributeError("Sketch must have a 'draw' function")

            controller = GenerationStateController(
                patterns=getattr(module, 'PATTERN_POOL', None), rng=self.rng)
            scheduler = None
            if getattr(module, 'ANIMATED', False):
                scheduler = AnimationScheduler(
                    controller, duration=self.animation_duration, interval=self.auto_regen_interval)

            with self._lock:
                self.current_sketch = module
                self.setup_func = getattr(module, 'setup', None)
                self.draw_func = module.draw
                self.controller = controller
                self.scheduler = scheduler
                self.ctx.sketch = os.path.basename(os.path.normpath(sketch_path))
                self.ctx.frame_count = 0
                self.ctx.now = self.clock()
                if scheduler is not None:
                    self.ctx.generation, self.ctx.animation = scheduler.start(self.ctx.now)
                else:
                    self.ctx.generation = controller.initial_state()
                    self.ctx.animation = None
                self.is_initialized = False

            logger.info("Loaded sketch %s", self.ctx.sketch)
            return True, f"Sketch '{self.ctx.sketch}' loaded successfully"

        except Exception as e:
            error_msg = f"Error loading sketch: {str(e)}\n{traceback.format_exc()}"
            logger.error(error_msg)
            return False, error_msg

    def step(self):
        """Advance the clock-driven state by one frame"""
        with self._lock:
            self.ctx.now = self.clock()
            self.ctx.frame_count += 1
            if self.scheduler is not None:
                tick = self.scheduler.tick(self.ctx.generation, self.ctx.animation, self.ctx.now)
                self.ctx.generation, self.ctx.animation = tick.generation, tick.animation
                return tick.regenerated
            return False

    def draw_frame(self):
        """Step the state and draw one frame onto the canvas"""
        with self._lock:
            if not self.draw_func:
                raise RuntimeError("No sketch loaded")

            self.step()

            if not self.is_initialized and self.setup_func:
                self.setup_func(self.canvas, self.ctx)
            self.is_initialized = True

            self.canvas.clear()
            self._apply_stroke_weight()
            self.draw_func(self.canvas, self.ctx)

    def render_frame(self):
        """Render one frame and return as base64 image"""
        try:
            if not self.draw_func:
                return None, "No sketch loaded"

            with self._lock:
                self.draw_frame()
                return self.canvas.to_data_url(), None

        except Exception as e:
            error_msg = f"Error rendering frame: {str(e)}\n{traceback.format_exc()}"
            return None, error_msg

    def regenerate(self):
        """Full regeneration: new hues, new shape/pattern selection"""
        with self._lock:
            if self.controller is None:
                return False
            if self.scheduler is not None:
                self.ctx.now = self.clock()
                self.ctx.generation, self.ctx.animation = self.scheduler.regenerate(
                    self.ctx.generation, self.ctx.now)
            else:
                self.ctx.generation = self.controller.regenerate(self.ctx.generation)
            return True

    def handle_pointer(self, x, y, over_overlay=False):
        """Pointer press on the canvas; presses on UI overlays never regenerate"""
        if over_overlay:
            return False
        logger.debug("Pointer press at (%s, %s)", x, y)
        return self.regenerate()

    def set_shape_kind(self, kind):
        with self._lock:
            self._require_manual_selection()
            self.ctx.generation = self.controller.with_shape_kind(self.ctx.generation, kind)

    def set_pattern_name(self, name):
        with self._lock:
            self._require_manual_selection()
            self.ctx.generation = self.controller.with_pattern_name(self.ctx.generation, name)

    def get_selection(self):
        """Active shape and pattern names, None for each while cells animate"""
        with self._lock:
            generation = self.ctx.generation
            if generation is None or self.scheduler is not None:
                return {'shape': None, 'pattern': None}
            return {'shape': str(generation.shape_kind), 'pattern': generation.pattern_name.value}

    def get_active_pattern_display_name(self):
        with self._lock:
            if self.ctx.animation is not None:
                return ' / '.join(display_name(p) for p in self.ctx.animation.cell_patterns)
            if self.ctx.generation is None:
                return ''
            return display_name(self.ctx.generation.pattern_name)

    def on_resize(self, width, height):
        """Resize the canvas; generation and animation state are untouched"""
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid canvas size: {width}x{height}")
        with self._lock:
            self.canvas.resize(width, height)
            self.ctx.width, self.ctx.height = width, height
            self._apply_stroke_weight()

    def _require_sketch(self):
        if self.controller is None:
            raise RuntimeError("No sketch loaded")

    def _require_manual_selection(self):
        self._require_sketch()
        # Each animated cell draws its own sampled pattern and shape
        if self.scheduler is not None:
            raise RuntimeError(f"Sketch '{self.ctx.sketch}' picks shapes and patterns per cell")

    def get_status(self):
        """Get current engine status"""
        with self._lock:
            generation = self.ctx.generation
            return {
                'sketch_loaded': self.current_sketch is not None,
                'current_sketch': self.ctx.sketch,
                'animated': self.scheduler is not None,
                'base_hue': generation.base_hue if generation else None,
                'shape': str(generation.shape_kind) if generation else None,
                'pattern': self.get_active_pattern_display_name(),
                'resolution': (self.ctx.width, self.ctx.height),
            }
