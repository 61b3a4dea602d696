"""Derived one-to-many index over an entity store."""

from typing import Callable, Dict, Generic, Hashable, List, TypeVar

from storekit.repositories.base import T
from storekit.repositories.entity_store import EntityStore

K = TypeVar('K', bound=Hashable)


class DerivedIndex(Generic[K, T]):
    """
    Entities grouped by a foreign-key value.

    An index is a snapshot of its store at the time ``build_index`` ran.
    Later adds, removals or field updates on the store are NOT reflected;
    call ``build_index`` again to refresh it.
    """

    def __init__(self, groups: Dict[K, List[T]], source_size: int):
        self._groups = groups
        self.source_size = source_size

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, key: object) -> bool:
        return key in self._groups

    def keys(self) -> List[K]:
        """Keys in order of first appearance."""
        return list(self._groups)

    def lookup(self, key: K) -> List[T]:
        """Get the group for a key, or an empty list if it has none."""
        return list(self._groups.get(key, []))


def build_index(store: EntityStore[T], key_fn: Callable[[T], K]) -> DerivedIndex[K, T]:
    """
    Group a store's current snapshot by ``key_fn``.

    Order within each group follows the store's enumeration order. The
    store itself is not modified.

    Args:
        store: Store to read
        key_fn: Extracts the grouping key (e.g. ``lambda rx: rx.patient_id``)

    Returns:
        DerivedIndex built from ``store.list()``
    """
    snapshot = store.list()
    groups: Dict[K, List[T]] = {}
    for entity in snapshot:
        groups.setdefault(key_fn(entity), []).append(entity)
    return DerivedIndex(groups, source_size=len(snapshot))
