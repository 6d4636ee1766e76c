from .registry import (
    ApiResult,
    Registry,
    RegistryCreate,
    RegistryEntry,
    RegistryFile,
)
from .image import (
    Image,
    Tag,
)

__all__ = [
    "ApiResult",
    "Registry",
    "RegistryCreate",
    "RegistryEntry",
    "RegistryFile",
    "Image",
    "Tag",
]
