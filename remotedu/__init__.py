"""
Disk usage for a remotely hosted directory namespace.
"""
__version__ = "0.1.0"
