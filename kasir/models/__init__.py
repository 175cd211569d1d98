# Importing the module registers tables with Base for create_all()
from .core import StoreEntry  # noqa: F401

__all__ = ["StoreEntry"]
