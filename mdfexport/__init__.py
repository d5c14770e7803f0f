# mdfexport/__init__.py
"""Export channels of an MDF measurement file as delimited text."""

__version__ = "0.1.0"
