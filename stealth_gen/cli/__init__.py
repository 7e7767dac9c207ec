"""
StealthGen - CLI Package
==========================
"""

from stealth_gen.cli.main import app

__all__ = ["app"]
