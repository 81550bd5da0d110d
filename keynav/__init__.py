"""
keynav - Keyboard Focus Navigation Engine
"""

__version__ = "0.3.0"
