"""
Flask app for the Sacred Geometry Simulator
"""

import logging
import os
import threading
import time

from flask import Flask, render_template, request
from flask_socketio import SocketIO, emit

from config import config, parse_seed
from sacred_geometry.geometry_engine import SacredGeometryEngine
from sacred_geometry.patterns import registered_patterns
from sacred_geometry.shapes import SHAPE_KINDS

# Get project root directory (parent of sacred_geometry/)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SKETCHES_DIR = os.path.join(PROJECT_ROOT, 'sketches')

app = Flask(__name__,
    template_folder='../frontend/templates',
    static_folder='../frontend/static'
)

# Configure app based on environment
config_name = os.environ.get('FLASK_ENV', 'development')
app.config.from_object(config[config_name])

logging.basicConfig(
    level=getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)

socketio = SocketIO(app, cors_allowed_origins="*", async_mode='threading')


def create_engine(cfg):
    """Build an engine from a Flask config mapping and load the default sketch"""
    new_engine = SacredGeometryEngine(
        width=cfg['CANVAS_WIDTH'],
        height=cfg['CANVAS_HEIGHT'],
        seed=parse_seed(cfg['SEED']),
        animation_duration=cfg['ANIMATION_DURATION_MS'],
        auto_regen_interval=cfg['AUTO_REGEN_INTERVAL_MS'],
    )
    default_path = os.path.join(SKETCHES_DIR, cfg['DEFAULT_SKETCH'])
    if os.path.isdir(default_path):
        success, message = new_engine.load_sketch(default_path)
        if not success:
            logger.error("Default sketch failed to load: %s", message)
    return new_engine


# Global engine instance
engine = create_engine(app.config)
is_running = False
render_thread = None


def resolve_sketch_path(sketch_path):
    """Map a sketch name to its directory, refusing paths outside SKETCHES_DIR"""
    full_path = os.path.realpath(os.path.join(SKETCHES_DIR, sketch_path))
    if os.path.commonpath([full_path, os.path.realpath(SKETCHES_DIR)]) != os.path.realpath(SKETCHES_DIR):
        raise ValueError(f"Sketch path outside sketches directory: {sketch_path}")
    return full_path


def pattern_payload():
    """Display name plus the active shape/pattern so the page can re-sync its selectors"""
    payload = {'name': engine.get_active_pattern_display_name()}
    payload.update(engine.get_selection())
    return payload


def emit_pattern():
    emit('pattern', pattern_payload())


@app.route('/')
def index():
    """Serve the main interface"""
    return render_template('index.html')

@socketio.on('connect')
def handle_connect():
    """Handle client connection"""
    logger.info("Client connected: %s", request.sid)
    emit('status', {'message': 'Connected to sacred geometry simulator', 'type': 'success'})
    emit('options', {
        'shapes': [kind.name for kind in SHAPE_KINDS],
        'patterns': [name.value for name in registered_patterns()],
    })
    emit_pattern()

@socketio.on('disconnect')
def handle_disconnect():
    """Handle client disconnection"""
    logger.info("Client disconnected: %s", request.sid)

@socketio.on('get_sketches')
def handle_get_sketches():
    """Get list of available sketches"""
    try:
        if not os.path.exists(SKETCHES_DIR):
            emit('sketches_list', {'sketches': [], 'message': 'Sketches directory not found'})
            return

        sketches = []
        for item in sorted(os.listdir(SKETCHES_DIR)):
            sketch_path = os.path.join(SKETCHES_DIR, item)
            if os.path.isdir(sketch_path) and os.path.exists(os.path.join(sketch_path, 'main.py')):
                sketches.append({
                    'name': item,
                    'path': item
                })

        emit('sketches_list', {'sketches': sketches})

    except Exception as e:
        emit('status', {'message': f'Error getting sketches: {str(e)}', 'type': 'error'})

@socketio.on('load_sketch')
def handle_load_sketch(data):
    """Load a sketch by directory name"""
    try:
        sketch_path = data.get('path')
        if not sketch_path:
            emit('status', {'message': 'No sketch path provided', 'type': 'error'})
            return

        success, message = engine.load_sketch(resolve_sketch_path(sketch_path))

        if success:
            emit('status', {'message': message, 'type': 'success'})
            emit_pattern()
            # Send an initial frame so user sees something immediately
            image_data, error = engine.render_frame()
            if image_data:
                emit('frame', {'image': image_data})
        else:
            emit('status', {'message': message, 'type': 'error'})

    except Exception as e:
        emit('status', {'message': f'Error loading sketch: {str(e)}', 'type': 'error'})

@socketio.on('start_rendering')
def handle_start_rendering():
    """Start the rendering loop"""
    global is_running, render_thread

    if is_running:
        emit('status', {'message': 'Already running', 'type': 'info'})
        return

    is_running = True
    render_thread = threading.Thread(target=render_loop)
    render_thread.daemon = True
    render_thread.start()

    emit('status', {'message': 'Rendering started', 'type': 'success'})

@socketio.on('stop_rendering')
def handle_stop_rendering():
    """Stop the rendering loop"""
    global is_running

    is_running = False
    emit('status', {'message': 'Rendering stopped', 'type': 'info'})

@socketio.on('pointer')
def handle_pointer(data):
    """Pointer press on the canvas; the page flags presses over its controls"""
    try:
        regenerated = engine.handle_pointer(
            data.get('x', 0), data.get('y', 0), bool(data.get('over_overlay', False)))
        if regenerated:
            emit_pattern()
    except Exception as e:
        emit('status', {'message': f'Error handling pointer: {str(e)}', 'type': 'error'})

@socketio.on('regenerate')
def handle_regenerate():
    """Regenerate button"""
    try:
        engine.regenerate()
        emit_pattern()
    except Exception as e:
        emit('status', {'message': f'Error regenerating: {str(e)}', 'type': 'error'})

@socketio.on('set_shape')
def handle_set_shape(data):
    """Shape selector"""
    try:
        engine.set_shape_kind(data.get('shape'))
        emit('status', {'message': f"Shape set to {data.get('shape')}", 'type': 'success'})
    except Exception as e:
        emit('status', {'message': f'Error setting shape: {str(e)}', 'type': 'error'})

@socketio.on('set_pattern')
def handle_set_pattern(data):
    """Pattern selector"""
    try:
        engine.set_pattern_name(data.get('pattern'))
        emit_pattern()
    except Exception as e:
        emit('status', {'message': f'Error setting pattern: {str(e)}', 'type': 'error'})

@socketio.on('resize')
def handle_resize(data):
    """Browser viewport changed; resize and push a fresh frame"""
    try:
        engine.on_resize(data.get('width'), data.get('height'))
        image_data, error = engine.render_frame()
        if image_data:
            emit('frame', {'image': image_data})
        elif error:
            logger.warning("Render after resize failed: %s", error)
    except Exception as e:
        emit('status', {'message': f'Error resizing: {str(e)}', 'type': 'error'})

def render_loop():
    """Main rendering loop that runs in a separate thread"""
    target_fps = app.config['TARGET_FPS']
    frame_time = 1.0 / target_fps
    frame_count = 0
    last_pattern = None

    logger.info("Render loop started")

    while is_running:
        start_time = time.time()

        # A failed frame is reported and the loop keeps going
        try:
            image_data, error = engine.render_frame()

            if image_data:
                socketio.emit('frame', {'image': image_data})
                frame_count += 1
                if frame_count % 30 == 0:
                    logger.debug("Rendered %d frames", frame_count)
            elif error:
                logger.error("Render error: %s", error)
                socketio.emit('status', {'message': error, 'type': 'error'})

            pattern = pattern_payload()
            if pattern != last_pattern:
                socketio.emit('pattern', pattern)
                last_pattern = pattern

        except Exception as e:
            logger.exception("Exception in render loop")
            socketio.emit('status', {'message': f'Render error: {str(e)}', 'type': 'error'})

        # Maintain target FPS
        elapsed = time.time() - start_time
        sleep_time = max(0, frame_time - elapsed)
        time.sleep(sleep_time)

    logger.info("Render loop stopped")

def create_app(config_name=None):
    """Application factory pattern"""
    global engine

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app.config.from_object(config[config_name])
    engine = create_engine(app.config)
    return app

if __name__ == '__main__':
    print("Starting Sacred Geometry Simulator...")

    port = int(os.environ.get('PORT', 5001))
    host = os.environ.get('HOST', '0.0.0.0')

    if app.config['DEBUG']:
        print(f"Development mode: http://localhost:{port}")
        socketio.run(app, host=host, port=port, debug=True, allow_unsafe_werkzeug=True)
    else:
        print(f"Production mode: http://{host}:{port}")
        socketio.run(app, host=host, port=port, debug=False)
