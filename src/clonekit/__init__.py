"""clonekit: linked clones of large editor projects."""

__version__ = "0.3.0"
