"""
Cinegoose: the International Goose Movie Database API.
"""

__version__ = "1.0.0"
