"""
Random-review sentiment demo backed by a hosted inference endpoint.
"""

__version__ = "0.1.0"
