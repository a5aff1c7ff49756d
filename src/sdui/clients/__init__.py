"""
Client modules for external service communication
"""

from .screens import ScreenClient

__all__ = ["ScreenClient"]
