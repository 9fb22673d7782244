"""Priority queue of links waiting to be explored."""

from site_explorer.data import URLNode


class Frontier:
    """Links ordered by ``relevance_score * (1 + confidence)``, highest first.

    Ties keep insertion order: among equal priorities the earliest enqueued
    node is dequeued first. Insertion is a linear scan, which is fine for the
    tens of nodes a single question accumulates.
    """

    def __init__(self) -> None:
        self._items: list[URLNode] = []

    def __len__(self) -> int:
        return len(self._items)

    def enqueue(self, node: URLNode) -> None:
        priority = node.priority
        for i, existing in enumerate(self._items):
            if priority > existing.priority:
                self._items.insert(i, node)
                return
        self._items.append(node)

    def dequeue(self) -> URLNode | None:
        """Remove and return the highest-priority node, or None if empty."""
        if not self._items:
            return None
        return self._items.pop(0)

    def is_empty(self) -> bool:
        return not self._items
