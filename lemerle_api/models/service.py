import datetime as dt

from sqlmodel import Field, SQLModel

from lemerle_api.models.base import created_at_field


class Service(SQLModel, table=True):
    """Reference data for the services offered; one column per locale."""

    __tablename__ = "services"
    id: int | None = Field(default=None, primary_key=True)
    title_fr: str
    title_en: str
    title_ar: str
    description_fr: str | None = None
    description_en: str | None = None
    description_ar: str | None = None
    # JSON-encoded list of strings
    features_fr: str | None = None
    features_en: str | None = None
    features_ar: str | None = None
    image: str | None = None
    date_creation: dt.datetime = created_at_field()


class ServiceTitles(SQLModel):
    id: int
    title_fr: str
    title_en: str
    title_ar: str


class ServicePublic(SQLModel):
    title: str
    description: str | None = None
    image: str | None = None
    dateCreation: str
    features: list[str] = []
