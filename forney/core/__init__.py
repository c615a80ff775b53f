"""
Core module: ID registry.
"""

from forney.core.registry import IDRegistry

__all__ = ["IDRegistry"]
