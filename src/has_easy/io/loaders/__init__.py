from .errors import LoaderError
from .schema_loader import load_collections

__all__ = ["LoaderError", "load_collections"]
