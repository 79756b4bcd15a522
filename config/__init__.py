"""Top-level package for Django configuration.

This package contains the settings modules for different environments,
the URL configuration, the WSGI and ASGI entry points, and the
composition root that wires the use cases onto the message bus.
"""
