"""Per-modulus lookup table for GF(N).

For a prime N the table holds four mappings over the residues 0 … N-1:

  additive_inverse       (N - i) mod N           always present
  multiplicative_inverse x with i*x = 1 (mod N)  absent for 0
  square                 i*i mod N               always present
  square_root            smallest j with j*j = i absent for non-residues

Absent entries are ``None``.  Tables are built once per modulus by
``get_table`` and are read-only afterwards, so a single instance is shared
by every element of that field.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Dict, List, Optional, Sequence, Tuple

from primefield import config
from primefield.core.errors import ResidueOutOfRangeError, TableTooLargeError
from primefield.core.modulus import Modulus, validate_modulus

logger = logging.getLogger(__name__)

Entry = Optional[int]
Mappings = Tuple[Tuple[Entry, ...], Tuple[Entry, ...], Tuple[Entry, ...], Tuple[Entry, ...]]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def _build_search(n: int) -> Mappings:
    """Reference construction: O(N^2) linear search for inverses and roots."""
    add_inv: List[Entry] = [None] * n
    mul_inv: List[Entry] = [None] * n
    square: List[Entry] = [None] * n
    root: List[Entry] = [None] * n

    for i in range(1, n):
        add_inv[i] = n - i
        square[i] = (i * i) % n
        # 1/i is x = (y*N + 1) / i for the first y where i divides y*N + 1
        for y in range(n):
            candidate = (y * n + 1) // i
            if (i * candidate) % n == 1:
                mul_inv[i] = candidate
                break

    # Only the first (smaller) of the two roots j, N-j is ever recorded.
    for i in range(1, n):
        for j in range(1, n):
            if square[j] == i:
                root[i] = j
                break

    add_inv[0] = 0
    square[0] = 0
    root[0] = 0
    return tuple(add_inv), tuple(mul_inv), tuple(square), tuple(root)


def _build_fast(n: int) -> Mappings:
    """Same table as ``_build_search`` in O(N log N).

    Inverses come from Fermat's little theorem.  Roots come from a single
    ascending pass over the squares, which keeps the smaller root exactly
    like the linear search does.
    """
    add_inv: List[Entry] = [0] + [n - i for i in range(1, n)]
    mul_inv: List[Entry] = [None] + [pow(i, n - 2, n) for i in range(1, n)]
    square: List[Entry] = [(i * i) % n for i in range(n)]
    root: List[Entry] = [None] * n
    root[0] = 0
    for j in range(1, n):
        s = square[j]
        if root[s] is None:
            root[s] = j
    return tuple(add_inv), tuple(mul_inv), tuple(square), tuple(root)


_BUILDERS = {
    "search": _build_search,
    "fast": _build_fast,
}


def resolve_strategy(n: int, strategy: str | None = None) -> str:
    """Pick the construction strategy for modulus *n*."""
    if strategy is None:
        strategy = config.TABLE_STRATEGY
    if strategy not in config.TABLE_STRATEGIES:
        raise ValueError(
            f"Unknown table strategy {strategy!r}; expected one of {config.TABLE_STRATEGIES}"
        )
    if strategy == "auto":
        return "search" if n <= config.SEARCH_LIMIT else "fast"
    return strategy


class LookupTable:
    """Immutable inverse / square / square-root table for one prime modulus."""

    __slots__ = ("_modulus", "_strategy", "_add_inv", "_mul_inv", "_square", "_root")

    def __init__(
        self,
        modulus: int,
        additive_inverse: Sequence[Entry],
        multiplicative_inverse: Sequence[Entry],
        square: Sequence[Entry],
        square_root: Sequence[Entry],
        strategy: str = "search",
    ) -> None:
        for name, mapping in (
            ("additive_inverse", additive_inverse),
            ("multiplicative_inverse", multiplicative_inverse),
            ("square", square),
            ("square_root", square_root),
        ):
            if len(mapping) != modulus:
                raise ValueError(f"{name} has {len(mapping)} entries, expected {modulus}")
        self._modulus = modulus
        self._strategy = strategy
        self._add_inv = tuple(additive_inverse)
        self._mul_inv = tuple(multiplicative_inverse)
        self._square = tuple(square)
        self._root = tuple(square_root)

    @classmethod
    def build(cls, modulus: int | Modulus, strategy: str | None = None) -> "LookupTable":
        """Compute a fresh table.  Prefer ``get_table`` which caches."""
        n = validate_modulus(modulus)
        if n > config.MAX_TABLE_MODULUS:
            raise TableTooLargeError(
                f"Modulus {n} exceeds MAX_TABLE_MODULUS={config.MAX_TABLE_MODULUS}"
            )
        chosen = resolve_strategy(n, strategy)
        t0 = time.perf_counter()
        mappings = _BUILDERS[chosen](n)
        elapsed = time.perf_counter() - t0
        logger.info("Built GF(%d) lookup table (%s) in %.3fs", n, chosen, elapsed)
        return cls(n, *mappings, strategy=chosen)

    # ---- queries ----

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def strategy(self) -> str:
        """Construction strategy that produced this table."""
        return self._strategy

    def __len__(self) -> int:
        return self._modulus

    def __repr__(self) -> str:
        return f"LookupTable(modulus={self._modulus}, strategy={self._strategy!r})"

    def _check(self, x: int) -> int:
        if not 0 <= x < self._modulus:
            raise ResidueOutOfRangeError(x, self._modulus)
        return x

    def additive_inverse(self, x: int) -> Entry:
        return self._add_inv[self._check(x)]

    def multiplicative_inverse(self, x: int) -> Entry:
        """Inverse of *x*, or ``None`` for 0."""
        return self._mul_inv[self._check(x)]

    def square(self, x: int) -> Entry:
        return self._square[self._check(x)]

    def square_root(self, x: int) -> Entry:
        """Smaller square root of *x*, or ``None`` if *x* is a non-residue."""
        return self._root[self._check(x)]

    def quadratic_residues(self) -> List[int]:
        """Nonzero residues that have a square root, ascending."""
        return [i for i in range(1, self._modulus) if self._root[i] is not None]

    def mappings(self) -> Mappings:
        """The four raw mappings (additive, multiplicative, square, root)."""
        return self._add_inv, self._mul_inv, self._square, self._root

    def verify(self) -> bool:
        """Check every entry against the field axioms.

        Useful for tables rebuilt from a snapshot.
        """
        n = self._modulus
        if self._add_inv[0] != 0 or self._mul_inv[0] is not None:
            return False
        if self._square[0] != 0 or self._root[0] != 0:
            return False
        squares = set()
        for i in range(1, n):
            a, m, s = self._add_inv[i], self._mul_inv[i], self._square[i]
            if a is None or (i + a) % n != 0 or not 0 < a < n:
                return False
            if m is None or (i * m) % n != 1 or not 0 < m < n:
                return False
            if s != (i * i) % n:
                return False
            squares.add(s)
        for i in range(1, n):
            r = self._root[i]
            if r is None:
                if i in squares:
                    return False
                continue
            # stored root must be the first one an ascending search finds
            if not 0 < r < n or (r * r) % n != i or r > n - r:
                return False
        return True

    def snapshot(self):
        """Return a ``TableSnapshot`` carrying a content digest."""
        from primefield.core.snapshot import TableSnapshot

        return TableSnapshot.from_table(self)


# ---------------------------------------------------------------------------
# Process-wide cache, one table per modulus
# ---------------------------------------------------------------------------

_tables: Dict[int, LookupTable] = {}
_build_locks: Dict[int, threading.Lock] = {}
_registry_lock = threading.Lock()


def get_table(modulus: int | Modulus, strategy: str | None = None) -> LookupTable:
    """Return the shared table for *modulus*, building it on first use.

    Exactly one thread builds a given modulus; the others wait on that
    modulus' lock and then read the finished table.  *strategy* only
    matters for the first call, every strategy yields the same table.
    """
    n = validate_modulus(modulus)
    table = _tables.get(n)
    if table is not None:
        logger.debug("GF(%d) lookup table cache hit", n)
        return table

    with _registry_lock:
        lock = _build_locks.setdefault(n, threading.Lock())
    with lock:
        table = _tables.get(n)
        if table is None:
            table = LookupTable.build(n, strategy)
            _tables[n] = table
    return table


def cached_moduli() -> List[int]:
    """Moduli whose table has been built, ascending."""
    return sorted(_tables)


def clear_cache() -> None:
    """Forget every cached table.

    Field types that already hold a table keep using it.  Build locks are
    kept, so a build running in another thread still excludes new builders
    of the same modulus.
    """
    with _registry_lock:
        _tables.clear()
