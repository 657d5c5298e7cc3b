"""
Core modules for the Giveaway Bot

Modules:
- health_server: Flask liveness endpoint for the hosting platform
"""

from .health_server import create_health_app, start_health_server

__all__ = [
    'create_health_app',
    'start_health_server',
]
