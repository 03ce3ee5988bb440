"""
ExpiryAlert perishable inventory tracker.

The package exposes the inventory core (freshness classification, the item store and
its persistence collaborators) together with the HTTP and command-line surfaces.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
