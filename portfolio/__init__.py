"""
Academic portfolio API.

Content services, routers and the presentation client for a single-owner
academic portfolio site.
"""

__version__ = "1.0.0"
