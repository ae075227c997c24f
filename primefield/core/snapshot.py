"""Content-addressed lookup-table snapshots.

A ``TableSnapshot`` is a JSON-friendly dump of a ``LookupTable``.  Its
``digest`` is the SHA-256 of the canonical JSON of the modulus and the four
mappings, so two tables for the same modulus compare equal by digest no
matter which construction strategy produced them.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel

if TYPE_CHECKING:
    from primefield.core.lookup import LookupTable


def _canonical_digest(content: Dict[str, Any]) -> str:
    canonical = json.dumps(content, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


class TableSnapshot(BaseModel):
    """Serialisable view of one lookup table."""

    modulus: int
    strategy: str
    additive_inverse: List[Optional[int]]
    multiplicative_inverse: List[Optional[int]]
    square: List[Optional[int]]
    square_root: List[Optional[int]]
    digest: str = ""

    def model_post_init(self, __context: Any) -> None:
        if not self.digest:
            self.digest = self.compute_digest()

    def content(self) -> Dict[str, Any]:
        """The hashed part of the snapshot (everything but strategy/digest)."""
        return {
            "modulus": self.modulus,
            "additive_inverse": self.additive_inverse,
            "multiplicative_inverse": self.multiplicative_inverse,
            "square": self.square,
            "square_root": self.square_root,
        }

    def compute_digest(self) -> str:
        return _canonical_digest(self.content())

    @classmethod
    def from_table(cls, table: "LookupTable") -> "TableSnapshot":
        add_inv, mul_inv, square, root = table.mappings()
        return cls(
            modulus=table.modulus,
            strategy=table.strategy,
            additive_inverse=list(add_inv),
            multiplicative_inverse=list(mul_inv),
            square=list(square),
            square_root=list(root),
        )

    def to_table(self) -> "LookupTable":
        """Rebuild a ``LookupTable`` (not registered in the cache)."""
        from primefield.core.lookup import LookupTable
        from primefield.core.modulus import validate_modulus

        return LookupTable(
            validate_modulus(self.modulus),
            self.additive_inverse,
            self.multiplicative_inverse,
            self.square,
            self.square_root,
            strategy=self.strategy,
        )

    def verify(self) -> bool:
        """True if the digest matches and every entry obeys the field axioms."""
        if self.digest != self.compute_digest():
            return False
        return self.to_table().verify()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
