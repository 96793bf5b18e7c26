"""
er_giant/metrics/union_find.py — Disjoint-set forest over vertices 1..n.

Union by size with path halving: every operation is effectively O(1)
amortised (O(log* n) in the classical bound). Used by the union-find
component method and by the threshold sweep in
er_giant.metrics.percolation, where edges arrive one at a time and the
largest component size must be known after each insertion.
"""

from er_giant.errors import InvalidInput, InvalidParameter


class DisjointSet:
    """
    Disjoint-set structure on the fixed vertex set 1..n.

    Every vertex starts in its own singleton set. `largest` tracks the size
    of the biggest set incrementally, so querying it is O(1).
    """

    def __init__(self, n: int) -> None:
        if n < 1:
            raise InvalidParameter(f"DisjointSet needs at least one vertex, got n={n}")
        self.n = n
        # Index 0 is unused so that vertex labels index directly.
        self._parent = list(range(n + 1))
        self._size = [1] * (n + 1)
        self._size[0] = 0
        self.n_components = n
        self.largest = 1

    def _check(self, x: int) -> None:
        if not 1 <= x <= self.n:
            raise InvalidInput(f"Vertex {x} is outside the range 1..{self.n}.")

    def find(self, x: int) -> int:
        """Return the representative of x's set."""
        self._check(x)
        parent = self._parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, a: int, b: int) -> bool:
        """Merge the sets of a and b. Returns False if already joined."""
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return False

        size = self._size
        if size[ra] < size[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        size[ra] += size[rb]

        self.n_components -= 1
        if size[ra] > self.largest:
            self.largest = size[ra]
        return True

    def size_of(self, x: int) -> int:
        """Size of the set containing x."""
        return self._size[self.find(x)]

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def groups(self) -> list[set[int]]:
        """All sets, in order of their smallest member."""
        by_root: dict[int, set[int]] = {}
        for v in range(1, self.n + 1):
            by_root.setdefault(self.find(v), set()).add(v)
        return list(by_root.values())

    def partition(self) -> dict[int, int]:
        """
        Map every vertex to a component id.

        The id of a component is its smallest vertex, independent of which
        vertex happens to be the internal representative.
        """
        labels: dict[int, int] = {}
        root_label: dict[int, int] = {}
        for v in range(1, self.n + 1):
            root = self.find(v)
            # Vertices are visited in increasing order, so the first one
            # seen for a root is the component minimum.
            labels[v] = root_label.setdefault(root, v)
        return labels
