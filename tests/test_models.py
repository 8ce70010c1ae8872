from datetime import UTC, datetime

import pytest

from pokebinder.models.card import Card, CardImages, CardSet, parse_release_date
from pokebinder.models.collection import CollectionList
from pokebinder.models.query import ALL_SETS, QueryState


class TestParseReleaseDate:
    def test_catalog_format(self) -> None:
        expected = datetime(2023, 3, 31, tzinfo=UTC).timestamp()
        assert parse_release_date("2023/03/31") == expected

    def test_iso_format(self) -> None:
        assert parse_release_date("2023-03-31") == parse_release_date("2023/03/31")

    def test_missing_is_epoch(self) -> None:
        assert parse_release_date(None) == 0.0
        assert parse_release_date("") == 0.0

    def test_unparsable_is_epoch(self) -> None:
        assert parse_release_date("someday") == 0.0

    @pytest.mark.parametrize("value", [20230101, 2023.0, ["2023/03/31"], {"date": "2023/03/31"}])
    def test_non_string_is_epoch(self, value: object) -> None:
        assert parse_release_date(value) == 0.0


class TestCard:
    def test_from_api(self, sample_card_json: dict) -> None:
        card = Card.from_api(sample_card_json)

        assert card.id == "sv1-25"
        assert card.name == "Pikachu"
        assert card.number == "25"
        assert card.set_id == "sv1"
        assert card.card_set is not None
        assert card.card_set.release_date == "2023/03/31"
        assert card.card_set.printed_total == 198
        assert card.images.small.endswith("25.png")

    def test_to_dict_matches_catalog_shape(self, sample_card_json: dict) -> None:
        data = Card.from_api(sample_card_json).to_dict()

        assert data["id"] == "sv1-25"
        assert data["set"]["releaseDate"] == "2023/03/31"
        assert data["images"]["large"].endswith("25_hires.png")
        assert Card.from_api(data) == Card.from_api(sample_card_json)

    def test_card_without_set(self) -> None:
        card = Card.from_api({"id": "x-1", "name": "Mystery"})

        assert card.card_set is None
        assert card.set_id is None
        assert card.release_timestamp == 0.0
        assert card.images == CardImages()
        assert "set" not in card.to_dict()

    @pytest.mark.parametrize(
        "record",
        [
            {"name": "No ID"},
            {"id": "", "name": "Empty ID"},
            {"id": "x-1"},
            "not a dict",
            None,
        ],
    )
    def test_rejects_invalid_records(self, record: object) -> None:
        with pytest.raises(ValueError):
            Card.from_api(record)  # type: ignore[arg-type]

    @pytest.mark.parametrize("images", ["x", ["small.png"], 42])
    def test_non_object_images_are_ignored(self, images: object) -> None:
        card = Card.from_api({"id": "a-1", "name": "A", "images": images})

        assert card.images == CardImages()

    def test_non_string_image_urls_are_ignored(self) -> None:
        card = Card.from_api({"id": "a-1", "name": "A", "images": {"small": 5, "large": "l.png"}})

        assert card.images == CardImages(small="", large="l.png")

    def test_card_immutable(self, pikachu: Card) -> None:
        with pytest.raises(AttributeError):
            pikachu.name = "Raichu"  # type: ignore[misc]


class TestCardSet:
    def test_from_api_requires_id(self) -> None:
        with pytest.raises(ValueError):
            CardSet.from_api({"name": "Base"})

    def test_release_timestamp(self) -> None:
        card_set = CardSet(id="base1", name="Base", release_date="1999/01/09")
        assert card_set.release_timestamp == datetime(1999, 1, 9, tzinfo=UTC).timestamp()

    def test_wrongly_typed_fields_are_dropped(self) -> None:
        card_set = CardSet.from_api(
            {
                "id": "s",
                "name": "S",
                "series": 7,
                "releaseDate": 20230101,
                "printedTotal": "102",
                "total": True,
            }
        )

        assert card_set == CardSet(id="s", name="S")
        assert card_set.release_timestamp == 0.0

    def test_integer_counts_are_kept(self) -> None:
        card_set = CardSet.from_api({"id": "s", "name": "S", "printedTotal": 102, "total": 110})

        assert (card_set.printed_total, card_set.total) == (102, 110)


class TestCollectionList:
    def test_storage_keys(self) -> None:
        assert CollectionList.OWNED.storage_key == "ownedCards"
        assert CollectionList.DOUBLE.storage_key == "doubleCards"
        assert CollectionList.WISHLIST.storage_key == "wishlistCards"


class TestQueryState:
    def test_defaults(self) -> None:
        query = QueryState()
        assert query.page == 1
        assert query.search == ""
        assert query.set_filter == ALL_SETS

    def test_filter_changes_reset_page(self) -> None:
        query = QueryState(page=5)

        assert query.with_search("pika").page == 1
        assert query.with_set_filter("sv1").page == 1
        assert query.with_sort("-name").page == 1

    def test_page_change_keeps_filters(self) -> None:
        query = QueryState(search="pika", set_filter="sv1").with_page(3)

        assert query.page == 3
        assert query.search == "pika"
        assert query.set_filter == "sv1"

    def test_empty_set_filter_means_all(self) -> None:
        assert QueryState().with_set_filter("").set_filter == ALL_SETS
