"""folder-contents - paginated listing of folder contents in a hierarchical resource tree"""

__version__ = "0.1.0"
