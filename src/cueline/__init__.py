"""CueLine: rehearse a scene against recorded scene partners.

Pick a role in a multi-speaker script; CueLine plays the other characters'
lines and waits for you to speak your own before moving on.
"""

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = ["__version__"]
