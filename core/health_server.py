"""
Liveness web server
Minimal Flask app so the hosting platform can check the bot process is up
"""

import logging
import threading

from flask import Flask, jsonify
from sqlalchemy import text

from utils.error_helpers import json_error

logger = logging.getLogger(__name__)


def create_health_app(engine=None):
    """
    Build the Flask app

    Args:
        engine: Optional SQLAlchemy engine; /health pings it when given
    """
    app = Flask(__name__)

    @app.route('/')
    def index():
        return "Giveaway Bot is alive!"

    @app.route('/health')
    def health():
        """Health check endpoint for the hosting platform."""
        if engine is not None:
            try:
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
            except Exception as e:
                logger.warning(f"Health check database ping failed: {e}")
                return json_error("Database unreachable", 503, status="unhealthy")
        return jsonify({"status": "healthy"}), 200

    return app


def start_health_server(port, engine=None, host='0.0.0.0'):
    """Run the liveness server on a daemon thread"""
    app = create_health_app(engine)
    thread = threading.Thread(
        target=app.run,
        kwargs={'host': host, 'port': port, 'use_reloader': False},
        name='health-server',
        daemon=True
    )
    thread.start()
    logger.info(f"📡 Server listening on port {port}. Health check available at /")
    return thread
