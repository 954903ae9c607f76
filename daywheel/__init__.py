"""Daywheel - 24-hour circular timeline of events, tasks, sleep and daylight.

The engine (``daywheel.api``, ``daywheel.services``) is framework-agnostic;
``daywheel.ui`` paints it with Flet.
"""
__version__ = "0.1.0"
