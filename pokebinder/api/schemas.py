"""
Request and response models shared by the API routers.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pokebinder.models.card import Card, CardSet
from pokebinder.models.collection import CardPosition
from pokebinder.models.query import SortOption
from pokebinder.services.card_views import CardListView
from pokebinder.services.collection_store import CollectionStore
from pokebinder.services.pagination import compute_range, total_pages


class SetResponse(BaseModel):
    id: str
    name: str
    series: str = ""
    release_date: str | None = None
    printed_total: int | None = None
    total: int | None = None

    @classmethod
    def from_set(cls, card_set: CardSet) -> "SetResponse":
        return cls(
            id=card_set.id,
            name=card_set.name,
            series=card_set.series,
            release_date=card_set.release_date,
            printed_total=card_set.printed_total,
            total=card_set.total,
        )


class ImagesModel(BaseModel):
    small: str = ""
    large: str = ""


class CardResponse(BaseModel):
    """A card decorated with its collection membership."""

    id: str
    name: str
    number: str = ""
    set: SetResponse | None = None
    images: ImagesModel = Field(default_factory=ImagesModel)
    owned: bool = False
    double: bool = False
    wishlisted: bool = False

    @classmethod
    def from_card(cls, card: Card, store: CollectionStore) -> "CardResponse":
        membership = store.membership(card.id)
        return cls(
            id=card.id,
            name=card.name,
            number=card.number,
            set=SetResponse.from_set(card.card_set) if card.card_set else None,
            images=ImagesModel(small=card.images.small, large=card.images.large),
            owned=membership.owned,
            double=membership.double,
            wishlisted=membership.wishlisted,
        )


class CardPageResponse(BaseModel):
    """One page of a list view plus everything needed to render its pager."""

    cards: list[CardResponse] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 0
    page_range: list[int | str] = Field(
        default_factory=list,
        description='Page numbers to render, with "..." for collapsed runs',
    )
    params: dict[str, str] = Field(
        default_factory=dict,
        description="Addressable query parameters for this view state",
    )
    error: str | None = None

    @classmethod
    def from_view(
        cls,
        view: CardListView,
        items: list[Card],
        total_count: int,
        store: CollectionStore,
        error: str | None = None,
    ) -> "CardPageResponse":
        """
        Build the response from already-computed items and count.

        The caller passes `items` and `total_count` so a local view is
        processed once per request.
        """
        page = view.query.page
        return cls(
            cards=[CardResponse.from_card(card, store) for card in items],
            total_count=total_count,
            page=page,
            page_size=view.page_size,
            total_pages=total_pages(total_count, view.page_size),
            page_range=compute_range(page, total_count, view.page_size),
            params=view.to_params(),
            error=error,
        )


class SetPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    series: str = ""
    release_date: str | None = Field(default=None, alias="releaseDate")
    printed_total: int | None = Field(default=None, alias="printedTotal")
    total: int | None = None


class CardPayload(BaseModel):
    """Card record in the catalog's JSON shape."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str
    number: str = ""
    images: ImagesModel = Field(default_factory=ImagesModel)
    card_set: SetPayload | None = Field(default=None, alias="set")

    def to_card(self) -> Card:
        data: dict[str, Any] = self.model_dump(by_alias=True, exclude_none=True)
        return Card.from_api(data)


class SortOptionResponse(BaseModel):
    value: str
    label: str

    @classmethod
    def from_option(cls, option: SortOption) -> "SortOptionResponse":
        return cls(value=option.value, label=option.label)


class MembershipResponse(BaseModel):
    card_id: str
    owned: bool
    double: bool
    wishlisted: bool
    position: CardPosition

    @classmethod
    def for_card(cls, card_id: str, store: CollectionStore) -> "MembershipResponse":
        membership = store.membership(card_id)
        return cls(
            card_id=card_id,
            owned=membership.owned,
            double=membership.double,
            wishlisted=membership.wishlisted,
            position=store.position(card_id),
        )
