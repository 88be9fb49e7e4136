"""RegRef - Regulatory reference finder.

Extracts metadata from regulatory circulars and resolves the references a
document makes against a locally held circular collection.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
