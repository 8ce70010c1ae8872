"""
Card and Set records as served by the catalog.

Records are immutable once fetched. The dict shape produced by `to_dict()`
matches the catalog's JSON so stored lists and API payloads share one format.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

# The catalog serves "2023/03/31"; ISO dates are accepted as well
_RELEASE_DATE_FORMATS = ("%Y/%m/%d", "%Y-%m-%d")


def parse_release_date(value: Any) -> float:
    """
    Convert a release date string to a POSIX timestamp.

    Missing or unparsable dates map to the epoch (0.0) so they sort first
    in ascending order and last in descending order.
    """
    if not isinstance(value, str) or not value:
        return 0.0
    text = value.strip()
    for fmt in _RELEASE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=UTC).timestamp()
        except ValueError:
            continue
    return 0.0


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int_or_none(value: Any) -> int | None:
    # bool is an int subclass but never a card count
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass(frozen=True, slots=True)
class CardImages:
    """Small and large image URLs for a card."""

    small: str = ""
    large: str = ""


@dataclass(frozen=True, slots=True)
class CardSet:
    """
    A release grouping of cards.

    Attributes:
        id: Catalog set ID (e.g., "sv1", "base1")
        name: Display name
        series: Series the set belongs to (e.g., "Scarlet & Violet")
        release_date: Release date as served by the catalog ("YYYY/MM/DD")
        printed_total: Number of cards printed in the set
        total: Number of cards including secret rares
    """

    id: str
    name: str
    series: str = ""
    release_date: str | None = None
    printed_total: int | None = None
    total: int | None = None

    @property
    def release_timestamp(self) -> float:
        return parse_release_date(self.release_date)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CardSet":
        """
        Build a set from a catalog JSON object.

        Raises:
            ValueError: If the object lacks an id or name
        """
        set_id = data.get("id")
        name = data.get("name")
        if not isinstance(set_id, str) or not set_id or not isinstance(name, str):
            raise ValueError(f"Set record missing id or name: {data!r}")
        return cls(
            id=set_id,
            name=name,
            series=_str_or_none(data.get("series")) or "",
            release_date=_str_or_none(data.get("releaseDate")),
            printed_total=_int_or_none(data.get("printedTotal")),
            total=_int_or_none(data.get("total")),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "name": self.name, "series": self.series}
        if self.release_date is not None:
            result["releaseDate"] = self.release_date
        if self.printed_total is not None:
            result["printedTotal"] = self.printed_total
        if self.total is not None:
            result["total"] = self.total
        return result


@dataclass(frozen=True, slots=True)
class Card:
    """
    A single catalog card.

    Attributes:
        id: Opaque catalog ID (e.g., "base1-4")
        name: Display name
        number: Printed number within the set
        card_set: Set the card was printed in, if the catalog sent one
        images: Image URLs
    """

    id: str
    name: str
    number: str = ""
    card_set: CardSet | None = None
    images: CardImages = field(default_factory=CardImages)

    @property
    def set_id(self) -> str | None:
        return self.card_set.id if self.card_set else None

    @property
    def release_timestamp(self) -> float:
        """Release timestamp of the owning set; epoch when unknown."""
        return self.card_set.release_timestamp if self.card_set else 0.0

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Card":
        """
        Build a card from a catalog JSON object.

        Raises:
            ValueError: If the object is not a card record
        """
        if not isinstance(data, dict):
            raise ValueError(f"Card record must be an object, got {type(data).__name__}")

        card_id = data.get("id")
        name = data.get("name")
        if not isinstance(card_id, str) or not card_id or not isinstance(name, str):
            raise ValueError(f"Card record missing id or name: {data!r}")

        set_data = data.get("set")
        card_set = CardSet.from_api(set_data) if isinstance(set_data, dict) else None

        images_data = data.get("images")
        if not isinstance(images_data, dict):
            images_data = {}
        images = CardImages(
            small=_str_or_none(images_data.get("small")) or "",
            large=_str_or_none(images_data.get("large")) or "",
        )

        return cls(
            id=card_id,
            name=name,
            number=str(data.get("number") or ""),
            card_set=card_set,
            images=images,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "images": {"small": self.images.small, "large": self.images.large},
        }
        if self.card_set is not None:
            result["set"] = self.card_set.to_dict()
        return result
