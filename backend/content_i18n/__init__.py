"""
Dynamic content translation and caching for the Asal Media Group website.
"""

__version__ = "1.0.0"
