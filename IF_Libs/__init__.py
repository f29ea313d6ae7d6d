"""
IF_Libs - InstaFilter Library Modules

This package contains core functionality for the InstaFilter project,
organized into specialized sub-packages:

- FilterLib: Filter kinds, intensity mapping, and Pillow executors
- ImageEditingLib: Photo model, decoding, and export
- SessionLib: Filter session, asynchronous photo loading, usage counter
"""

__version__ = "0.1.0"
