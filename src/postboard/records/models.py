from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

PAGE_SIZE = 10


class Record(BaseModel):
    """One fetched post. Immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    user_id: int = Field(alias="userId")
    title: str
    body: str


Collection = Tuple[Record, ...]


class FilterSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: Optional[int] = None
    text: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.user_id is None and self.text is None


class SortSpec(str, Enum):
    NONE = "none"
    BY_TITLE_ASCENDING = "title"


class PageState(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_size: int = Field(default=PAGE_SIZE, ge=1)
    current_page: int = Field(default=1, ge=1)


class ViewState(BaseModel):
    """
    Everything the view needs to render one screen.

    ``displayed`` is always derived from ``original`` through the query engine;
    transitions replace the whole state instead of editing it.
    """

    model_config = ConfigDict(frozen=True)

    original: Collection = ()
    displayed: Collection = ()
    filter_spec: FilterSpec = FilterSpec()
    sort_spec: SortSpec = SortSpec.NONE
    page_state: PageState = PageState()
