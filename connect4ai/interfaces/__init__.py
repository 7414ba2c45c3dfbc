"""
connect4ai.interfaces - User interfaces for connect4ai

Currently a terminal interface (connect4ai.interfaces.cli).
"""

# Don't import anything here to avoid circular imports
__all__ = []
