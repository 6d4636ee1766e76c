from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Image(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    source_repository_url: Optional[str] = Field(default=None, alias="sourceRepositoryUrl")


class Tag(BaseModel):
    name: str
