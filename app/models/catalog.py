from pydantic import BaseModel, ConfigDict, Field


class CatalogEntry(BaseModel):
    """A single row of the anime catalog CSV."""

    model_config = ConfigDict(frozen=True)

    anime_id: int = Field(ge=0)
    name: str = Field(min_length=1)
    genre: str = ""  # raw comma-separated tags
    type: str | None = None


class FacetSet(BaseModel):
    """Distinct type labels and genre tags present in a catalog."""

    model_config = ConfigDict(frozen=True)

    types: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
