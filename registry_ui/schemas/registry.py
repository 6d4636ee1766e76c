from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


# Registry Schemas
class RegistryBase(BaseModel):
    name: str
    url: str


class RegistryCreate(RegistryBase):
    """Request body of POST /api/registry."""

    name: str = Field(min_length=1)
    url: str = Field(min_length=1)


class RegistryEntry(RegistryBase):
    """A validated registry that has not been assigned an id yet."""

    token: Optional[str] = None


class Registry(RegistryEntry):
    id: int


class RegistryFile(BaseModel):
    """On-disk document: the last issued id and the registries in insertion order."""

    model_config = ConfigDict(populate_by_name=True)

    last_id: int = Field(default=0, alias="lastId")
    registries: List[Registry] = Field(default_factory=list, alias="list")

    def next_id(self) -> int:
        # Ids are never reused, even if lastId was edited below an existing id
        highest = max((r.id for r in self.registries), default=0)
        return max(self.last_id, highest) + 1


# Envelope
class ApiResult(BaseModel):
    """Uniform {status, message, data} response body."""

    status: int
    message: str
    data: Any = Field(default_factory=dict)
