"""
Dino Deputy: a desert arcade runner.

Run with `python -m dino_deputy`.
"""

__version__ = "0.1.0"
