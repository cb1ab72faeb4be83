"""
Top-level package for the Franchise API.

All functionality lives in submodules: the web application under
``app``, the command line runner in ``run`` and an HTTP client in
``client``.
"""

__all__ = []
