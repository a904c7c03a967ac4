"""
Todo record engine.

Line-oriented todo files in, merged and canonically ordered todo files out.
See records/ for the engine itself.
"""

__version__ = "0.1.0"
