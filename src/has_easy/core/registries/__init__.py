from .registry_base import NameRegistry

__all__ = ["NameRegistry"]
