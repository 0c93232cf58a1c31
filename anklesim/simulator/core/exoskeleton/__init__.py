"""
Exoskeleton domain components.
"""

from .exoskeleton import ExoskeletonSpring

__all__ = ["ExoskeletonSpring"]
