"""
WSGI entry point for Sacred Geometry Simulator
"""

from sacred_geometry.app import app, socketio

if __name__ == "__main__":
    # This is for when running with gunicorn
    socketio.run(app)
