"""
Application package initializer.

The application is organised into configuration and storage helpers
(``core``), request and response models (``schemas``), the store
adapter (``services``) and the HTTP routes (``api``).
"""

from .main import app  # noqa: F401
