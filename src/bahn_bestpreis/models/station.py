"""Station models"""

from pydantic import BaseModel, ConfigDict, Field


class StationRef(BaseModel):
    """A station resolved to its provider identifier"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque provider station id, used verbatim")
    name: str = Field("", description="Display name")
