"""Presentation-stable card view model."""

from pydantic import BaseModel


class CardViewModel(BaseModel):
    """A blog teaser card.

    Every field is always present; the home page grid and the listing
    endpoint rely on that.
    """

    title: str
    excerpt: str
    link: str
    image: str

    model_config = {"frozen": True}
