from enum import Enum


class CollectionList(str, Enum):
    """The three named card lists kept by the collection store."""

    OWNED = "owned"
    DOUBLE = "double"
    WISHLIST = "wishlist"

    @property
    def storage_key(self) -> str:
        """Key the list is persisted under."""
        return _STORAGE_KEYS[self]


_STORAGE_KEYS = {
    CollectionList.OWNED: "ownedCards",
    CollectionList.DOUBLE: "doubleCards",
    CollectionList.WISHLIST: "wishlistCards",
}


class CardPosition(str, Enum):
    """
    Where a single card sits relative to the collection store.

    WISHLISTED is mutually exclusive with OWNED and OWNED_DOUBLE.
    """

    NONE = "none"
    OWNED = "owned"
    OWNED_DOUBLE = "owned_double"
    WISHLISTED = "wishlisted"
