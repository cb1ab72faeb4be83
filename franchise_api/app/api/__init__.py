"""
API package.

``router`` exposes a top-level router that includes every
domain-specific router from ``endpoints``.
"""
