from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.page import PageModel


class PreviewResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: PageModel
    rendered_sections: Dict[str, str]
    """Section id → HTML markup, for every id in ``page.sections``."""
    fallback_sections: Tuple[str, ...] = ()
    """Ids whose ``rendered_sections`` value is raw markdown, not markup.

    These failed to render; their values must be escaped before display.
    """
