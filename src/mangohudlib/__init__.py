"""
MangoHud Config Library (mangohudlib)

The reader and writer for MangoHud's configuration format.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Where config files live on disk
    - Editing sessions or backups
    - Command-line or graphical front-ends

This package defines the CONFIG FORMAT only.

Front-ends consume this package through its public functions.
"""

__version__ = "0.1.0"
