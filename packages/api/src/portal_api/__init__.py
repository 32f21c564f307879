# This project was developed with assistance from AI tools.
"""SBA loan portal API."""

__version__ = "0.1.0"
