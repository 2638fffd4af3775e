"""mygit - a minimal content-addressable object store.

mygit stores file contents and directory snapshots as zlib-compressed,
SHA-1 addressed objects laid out the way git lays out its loose objects.
"""

__version__ = "0.1.0"
__author__ = "mygit Contributors"

__all__ = ["__version__", "__author__"]
