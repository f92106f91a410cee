"""
dropfour.interfaces - Hosts that drive a match

This package contains collaborators that sit outside the rules engine, such as the
console game loop.
"""

# Don't import anything here to avoid circular imports
__all__ = []
