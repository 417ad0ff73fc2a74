import uuid

from sqlmodel import Field, SQLModel


class Artist(SQLModel, table=True):
    """An artist who submits artworks and votes on others."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    email: str = Field(unique=True, index=True)
    full_name: str
    status: str = "ACTIVE"  # "ACTIVE", "SUSPENDED", "DEACTIVATED"
