"""
On-disk movie record schema.

These Pydantic models define the INPUT CONTRACT for corpus files.
A movies.json file is a JSON array of MovieRecord objects, written by the
loading/vectorization jobs and read by JsonFileCorpus.

Vector fields use the camelCase names the vectorization job writes
(`titleVector`, `descriptionVector`, ...). The combined whole-document
vector is stored under `embedding`.
"""

from pydantic import BaseModel, ConfigDict, Field


# Field names that may carry a vector on a record
VECTOR_FIELDS: tuple[str, ...] = (
    "embedding",
    "titleVector",
    "descriptionVector",
    "genreVector",
    "yearVector",
    "actorsVector",
    "reviewsVector",
)


class ReviewRecord(BaseModel):
    """A single user review attached to a movie."""

    reviewer: str = Field(description="Name of the reviewer")
    rating: float = Field(description="Numeric rating given by the reviewer")
    review: str = Field(description="Review text")


class MovieRecord(BaseModel):
    """
    A movie as stored in the corpus file.

    Unknown keys (e.g. storage metadata like `_rid`, `_etag`) are ignored
    so files exported from a document database load unchanged.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1, description="Unique, stable identifier")
    title: str
    description: str = ""
    genre: str = ""
    year: int | None = None
    actors: list[str] = Field(default_factory=list)
    reviews: list[ReviewRecord] = Field(default_factory=list)

    # Optional vectors; None means "not vectorized for this field"
    embedding: list[float] | None = None
    titleVector: list[float] | None = None
    descriptionVector: list[float] | None = None
    genreVector: list[float] | None = None
    yearVector: list[float] | None = None
    actorsVector: list[float] | None = None
    reviewsVector: list[float] | None = None

    def vectors(self) -> dict[str, list[float]]:
        """Return only the vector fields that are present and non-empty."""
        present = {}
        for name in VECTOR_FIELDS:
            value = getattr(self, name)
            if value:
                present[name] = value
        return present
