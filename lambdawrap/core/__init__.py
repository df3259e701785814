"""
Core types shared across lambdawrap.
"""

from lambdawrap.core.environment import Environment

__all__ = ["Environment"]
