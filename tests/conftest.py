from collections.abc import Callable

import pytest

from pokebinder.models.card import Card, CardImages, CardSet

CardFactory = Callable[..., Card]


@pytest.fixture
def make_card() -> CardFactory:
    """Factory for cards with sensible defaults."""

    def _make(
        card_id: str,
        name: str | None = None,
        set_id: str = "base1",
        release_date: str | None = "1999/01/09",
        number: str = "1",
    ) -> Card:
        return Card(
            id=card_id,
            name=name or card_id.title(),
            number=number,
            card_set=CardSet(id=set_id, name=set_id.upper(), series="Base", release_date=release_date),
            images=CardImages(
                small=f"https://images.example/{card_id}.png",
                large=f"https://images.example/{card_id}_hires.png",
            ),
        )

    return _make


@pytest.fixture
def pikachu(make_card: CardFactory) -> Card:
    return make_card("base1-58", "Pikachu", number="58")


@pytest.fixture
def sample_card_json() -> dict:
    """Card record as served by the catalog."""
    return {
        "id": "sv1-25",
        "name": "Pikachu",
        "number": "25",
        "supertype": "Pokémon",
        "images": {
            "small": "https://images.pokemontcg.io/sv1/25.png",
            "large": "https://images.pokemontcg.io/sv1/25_hires.png",
        },
        "set": {
            "id": "sv1",
            "name": "Scarlet & Violet",
            "series": "Scarlet & Violet",
            "printedTotal": 198,
            "total": 258,
            "releaseDate": "2023/03/31",
        },
    }
