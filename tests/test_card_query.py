import pytest

from pokebinder.models.card import Card
from pokebinder.models.query import ALL_SETS
from pokebinder.services.card_query import (
    SORTERS,
    filter_by_search,
    filter_by_set,
    process_cards,
    sort_cards,
)


@pytest.fixture
def cards(make_card) -> list[Card]:
    return [
        make_card("sv1-25", "Pikachu", set_id="sv1", release_date="2023/03/31"),
        make_card("base1-58", "Pikachu", set_id="base1", release_date="1999/01/09"),
        make_card("base1-4", "Charizard", set_id="base1", release_date="1999/01/09"),
        make_card("jungle-60", "Pikachu", set_id="jungle", release_date="1999/06/16"),
        make_card("promo-1", "bulbasaur", set_id="promo", release_date=None),
        make_card("sv1-1", "Raichu", set_id="sv1", release_date="2023/03/31"),
    ]


@pytest.fixture
def many_cards(make_card) -> list[Card]:
    return [make_card(f"card-{i:02d}", f"Card {i:02d}") for i in range(25)]


class TestSearchFilter:
    def test_case_insensitive_substring(self, cards: list[Card]) -> None:
        result = filter_by_search(cards, "PIKA")

        assert [c.id for c in result] == ["sv1-25", "base1-58", "jungle-60"]

    def test_matches_inside_name(self, cards: list[Card]) -> None:
        assert [c.id for c in filter_by_search(cards, "chu")] == [
            "sv1-25",
            "base1-58",
            "jungle-60",
            "sv1-1",
        ]

    def test_empty_term_matches_all(self, cards: list[Card]) -> None:
        assert filter_by_search(cards, "") == cards


class TestSetFilter:
    def test_all_sentinel_keeps_everything(self, cards: list[Card]) -> None:
        assert filter_by_set(cards, ALL_SETS) == cards

    def test_keeps_matching_set(self, cards: list[Card]) -> None:
        assert [c.id for c in filter_by_set(cards, "base1")] == ["base1-58", "base1-4"]

    def test_unknown_set_matches_nothing(self, cards: list[Card]) -> None:
        assert filter_by_set(cards, "nope") == []


class TestSorting:
    def test_name_is_case_sensitive(self, cards: list[Card]) -> None:
        names = [c.name for c in sort_cards(cards, "name")]

        # Uppercase sorts before lowercase
        assert names == ["Charizard", "Pikachu", "Pikachu", "Pikachu", "Raichu", "bulbasaur"]

    def test_name_then_reverse_name(self, make_card) -> None:
        distinct = [make_card(str(i), name) for i, name in enumerate(["Mew", "Abra", "Onix", "Eevee"])]

        ascending = sort_cards(distinct, "name")
        descending = sort_cards(distinct, "-name")

        assert descending == list(reversed(ascending))

    def test_release_date_ascending(self, cards: list[Card]) -> None:
        ids = [c.id for c in sort_cards(cards, "releaseDate")]

        # Missing date sorts as the epoch; ties keep input order
        assert ids == ["promo-1", "base1-58", "base1-4", "jungle-60", "sv1-25", "sv1-1"]

    def test_release_date_descending(self, cards: list[Card]) -> None:
        ids = [c.id for c in sort_cards(cards, "-releaseDate")]

        assert ids[:2] == ["sv1-25", "sv1-1"]
        assert ids[-1] == "promo-1"

    def test_set_order_breaks_ties_by_name(self, cards: list[Card]) -> None:
        ids = [c.id for c in sort_cards(cards, "set.releaseDate,number")]

        assert ids == ["promo-1", "base1-4", "base1-58", "jungle-60", "sv1-25", "sv1-1"]

    def test_unknown_key_falls_back_to_name(self, cards: list[Card]) -> None:
        assert sort_cards(cards, "rarity") == sort_cards(cards, "name")

    def test_sorting_does_not_mutate_input(self, cards: list[Card]) -> None:
        original = list(cards)
        for key in SORTERS:
            sort_cards(cards, key)

        assert cards == original

    @pytest.mark.parametrize("key", list(SORTERS))
    def test_deterministic(self, cards: list[Card], key: str) -> None:
        assert sort_cards(cards, key) == sort_cards(list(cards), key)


class TestProcessCards:
    def test_first_page(self, many_cards: list[Card]) -> None:
        result = process_cards(many_cards, "", ALL_SETS, "name", page=1, page_size=10)

        assert len(result.page_items) == 10
        assert result.total_match_count == 25
        assert result.page_items[0].name == "Card 00"

    def test_last_partial_page(self, many_cards: list[Card]) -> None:
        result = process_cards(many_cards, "", ALL_SETS, "name", page=3, page_size=10)

        assert len(result.page_items) == 5
        assert result.page_items[-1].name == "Card 24"

    def test_page_past_end_is_empty(self, many_cards: list[Card]) -> None:
        result = process_cards(many_cards, "", ALL_SETS, "name", page=4, page_size=10)

        assert result.page_items == []
        assert result.total_match_count == 25

    @pytest.mark.parametrize("page", [0, -1])
    def test_page_below_one_is_empty(self, many_cards: list[Card], page: int) -> None:
        result = process_cards(many_cards, "", ALL_SETS, "name", page=page, page_size=10)

        assert result.page_items == []
        assert result.total_match_count == 25

    def test_all_sets_matches_unfiltered_count(self, cards: list[Card]) -> None:
        result = process_cards(cards, "", ALL_SETS, "name", page=1, page_size=100)

        assert result.total_match_count == len(cards)

    def test_filters_combine(self, cards: list[Card]) -> None:
        result = process_cards(cards, "pika", "base1", "name", page=1, page_size=10)

        assert [c.id for c in result.page_items] == ["base1-58"]
        assert result.total_match_count == 1

    def test_input_not_mutated(self, cards: list[Card]) -> None:
        original = list(cards)
        process_cards(cards, "", ALL_SETS, "-name", page=1, page_size=2)

        assert cards == original
