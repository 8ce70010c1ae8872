"""
Collection store.

Single source of truth for the owned, double and wishlist card lists.

INVARIANT: A card in DOUBLE is also in OWNED.
INVARIANT: A card in WISHLIST is not in OWNED.

Mutations keep both invariants by cascading (removing an owned card drops its
double, owning a card drops it from the wishlist), by promotion (marking a
double owns the card first) or by silent rejection (an owned card cannot be
wishlisted). Every mutation persists each list it changed. Storage failures
are logged and never raised: the in-memory lists stay authoritative for the
session.
"""

import json
import logging
from dataclasses import dataclass

from pokebinder.db.storage import KeyValueStorage, StorageError
from pokebinder.models.card import Card
from pokebinder.models.collection import CardPosition, CollectionList

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Membership:
    """Membership flags for one card, used to decorate rendered cards."""

    owned: bool
    double: bool
    wishlisted: bool


class CollectionStore:
    """
    Owned, double and wishlist lists with cross-list invariants.

    Create one per application session and pass it to the views that need it.
    State is loaded from `storage` on construction.

    Usage:
        store = CollectionStore(JsonFileStorage(path))
        store.add_double(card)      # owns the card too
        store.remove_owned(card.id) # drops the double as well
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._lists: dict[CollectionList, dict[str, Card]] = {
            kind: self._load(kind) for kind in CollectionList
        }
        self._repair()

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _load(self, kind: CollectionList) -> dict[str, Card]:
        """Read one list from storage. Anything unreadable yields an empty list."""
        try:
            raw = self._storage.get(kind.storage_key)
        except StorageError as e:
            logger.warning("Could not read %s from storage: %s", kind.storage_key, e)
            return {}

        if raw is None:
            return {}

        try:
            records = json.loads(raw)
        except ValueError:
            logger.warning("Stored %s is not valid JSON, treating as empty", kind.storage_key)
            return {}

        if not isinstance(records, list):
            logger.warning("Stored %s is not a JSON array, treating as empty", kind.storage_key)
            return {}

        cards: dict[str, Card] = {}
        skipped = 0
        for record in records:
            try:
                card = Card.from_api(record)
            except ValueError:
                skipped += 1
                continue
            cards[card.id] = card

        if skipped:
            logger.warning("Skipped %d malformed records in stored %s", skipped, kind.storage_key)

        return cards

    def _repair(self) -> None:
        """Restore the invariants if stored lists disagree with each other."""
        owned = self._lists[CollectionList.OWNED]
        double = self._lists[CollectionList.DOUBLE]
        wishlist = self._lists[CollectionList.WISHLIST]
        touched: set[CollectionList] = set()

        for card_id, card in double.items():
            if card_id not in owned:
                owned[card_id] = card
                touched.add(CollectionList.OWNED)

        for card_id in [cid for cid in wishlist if cid in owned]:
            del wishlist[card_id]
            touched.add(CollectionList.WISHLIST)

        if touched:
            logger.warning(
                "Stored collection violated list invariants; repaired %s",
                ", ".join(sorted(kind.value for kind in touched)),
            )
            self._persist(touched)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _persist(self, touched: set[CollectionList]) -> None:
        for kind in CollectionList:
            if kind not in touched:
                continue
            payload = json.dumps([card.to_dict() for card in self._lists[kind].values()])
            try:
                self._storage.set(kind.storage_key, payload)
            except (StorageError, OSError):
                logger.exception("Failed to persist %s; keeping in-memory state", kind.storage_key)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _add_owned(self, card: Card, touched: set[CollectionList]) -> None:
        self._lists[CollectionList.OWNED][card.id] = card
        touched.add(CollectionList.OWNED)
        if self._lists[CollectionList.WISHLIST].pop(card.id, None) is not None:
            touched.add(CollectionList.WISHLIST)

    def add_owned(self, card: Card) -> None:
        """Mark a card as owned. Removes it from the wishlist."""
        touched: set[CollectionList] = set()
        self._add_owned(card, touched)
        self._persist(touched)

    def remove_owned(self, card_id: str) -> None:
        """Unmark a card as owned. Removes its double as well."""
        touched: set[CollectionList] = set()
        if self._lists[CollectionList.OWNED].pop(card_id, None) is not None:
            touched.add(CollectionList.OWNED)
        if self._lists[CollectionList.DOUBLE].pop(card_id, None) is not None:
            touched.add(CollectionList.DOUBLE)
        self._persist(touched)

    def add_double(self, card: Card) -> None:
        """Mark a card as a double, owning it first if needed."""
        touched: set[CollectionList] = set()
        if card.id not in self._lists[CollectionList.OWNED]:
            self._add_owned(card, touched)
        self._lists[CollectionList.DOUBLE][card.id] = card
        touched.add(CollectionList.DOUBLE)
        self._persist(touched)

    def remove_double(self, card_id: str) -> None:
        """Unmark a double. The card stays owned."""
        if self._lists[CollectionList.DOUBLE].pop(card_id, None) is not None:
            self._persist({CollectionList.DOUBLE})

    def add_wishlist(self, card: Card) -> bool:
        """
        Wishlist a card.

        Owned cards cannot be wishlisted; the request is ignored and nothing
        is written.

        Returns:
            True if the card is on the wishlist afterwards
        """
        if card.id in self._lists[CollectionList.OWNED]:
            logger.debug("Ignoring wishlist request for owned card %s", card.id)
            return False
        self._lists[CollectionList.WISHLIST][card.id] = card
        self._persist({CollectionList.WISHLIST})
        return True

    def remove_wishlist(self, card_id: str) -> None:
        """Remove a card from the wishlist."""
        if self._lists[CollectionList.WISHLIST].pop(card_id, None) is not None:
            self._persist({CollectionList.WISHLIST})

    def add(self, kind: CollectionList, card: Card) -> None:
        """Add a card to the named list."""
        if kind is CollectionList.OWNED:
            self.add_owned(card)
        elif kind is CollectionList.DOUBLE:
            self.add_double(card)
        else:
            self.add_wishlist(card)

    def remove(self, kind: CollectionList, card_id: str) -> None:
        """Remove a card from the named list."""
        if kind is CollectionList.OWNED:
            self.remove_owned(card_id)
        elif kind is CollectionList.DOUBLE:
            self.remove_double(card_id)
        else:
            self.remove_wishlist(card_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_owned(self, card_id: str) -> bool:
        return card_id in self._lists[CollectionList.OWNED]

    def is_double(self, card_id: str) -> bool:
        return card_id in self._lists[CollectionList.DOUBLE]

    def is_wishlisted(self, card_id: str) -> bool:
        return card_id in self._lists[CollectionList.WISHLIST]

    def membership(self, card_id: str) -> Membership:
        return Membership(
            owned=self.is_owned(card_id),
            double=self.is_double(card_id),
            wishlisted=self.is_wishlisted(card_id),
        )

    def position(self, card_id: str) -> CardPosition:
        if self.is_double(card_id):
            return CardPosition.OWNED_DOUBLE
        if self.is_owned(card_id):
            return CardPosition.OWNED
        if self.is_wishlisted(card_id):
            return CardPosition.WISHLISTED
        return CardPosition.NONE

    def cards(self, kind: CollectionList) -> list[Card]:
        """Snapshot of the cards in the named list."""
        return list(self._lists[kind].values())

    def owned_cards(self) -> list[Card]:
        return self.cards(CollectionList.OWNED)

    def double_cards(self) -> list[Card]:
        return self.cards(CollectionList.DOUBLE)

    def wishlist_cards(self) -> list[Card]:
        return self.cards(CollectionList.WISHLIST)

    def counts(self) -> dict[CollectionList, int]:
        """Number of cards in each list."""
        return {kind: len(cards) for kind, cards in self._lists.items()}
