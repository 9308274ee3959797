"""
Service interfaces (ABCs) for the ytcast application.

These abstract base classes define contracts for service implementations,
enabling dependency injection and testing with deterministic doubles.
"""

from .metadata_provider_interface import MetadataProviderInterface

__all__ = [
    "MetadataProviderInterface",
]
