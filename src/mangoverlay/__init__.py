"""
MangOverlay: configuration manager for MangoHud.

Finds, edits, checks and writes MangoHud configuration files. All
reading and writing of the file format is delegated to mangohudlib.
"""

__version__ = "0.1.0"
