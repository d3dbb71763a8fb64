from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Link(_Frozen):
    label: str
    href: str


class Feature(_Frozen):
    title: str
    desc: Optional[str] = None
    icon: Optional[str] = None


class Section(_Frozen):
    id: str = Field(pattern=r"^[a-z0-9-]+$")
    title: str
    content: str  # reconstructed markdown, not rendered markup


class Badge(_Frozen):
    label: str
    href: Optional[str] = None


class HeroImage(_Frozen):
    url: str
    alt: str


class Stat(_Frozen):
    label: str
    value: str


class Testimonial(_Frozen):
    quote: str
    author: Optional[str] = None


class PageModel(_Frozen):
    """Structured landing-page description extracted from one README.

    Optional collections are either ``None`` or non-empty; serialise with
    ``exclude_none=True`` so that absent fields are omitted.
    """

    title: str = Field(min_length=1)
    tagline: str = Field(min_length=1, max_length=160)
    cta: Link
    secondary_links: Tuple[Link, ...] = Field(default=(), max_length=4)
    features: Tuple[Feature, ...] = Field(default=(), max_length=6)
    sections: Tuple[Section, ...] = ()
    badges: Optional[Tuple[Badge, ...]] = Field(default=None, min_length=1, max_length=5)
    hero_image: Optional[HeroImage] = None
    stats: Optional[Tuple[Stat, ...]] = Field(default=None, min_length=1, max_length=4)
    tech_stack: Optional[Tuple[str, ...]] = Field(default=None, min_length=1, max_length=8)
    testimonials: Optional[Tuple[Testimonial, ...]] = Field(default=None, min_length=1, max_length=3)
