"""
Command-line interface for lambdawrap.
"""

from lambdawrap.cli.main import cli

__all__ = ["cli"]
