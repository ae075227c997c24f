#!/usr/bin/env python3
"""primefield walkthrough.

Usage:
    python -m primefield.demo.run_demo [N ...]

For each prime modulus (default: config.DEMO_MODULI) the script:
1. Builds the lookup table and prints its four mappings.
2. Divides two elements and multiplies back to show the round trip.
3. Takes a square root and its negation.
4. Triggers the typed errors for 1/0 and the root of a non-residue.
5. Prints the table snapshot digest.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from primefield.config import DEMO_MODULI
from primefield.core.element import GF
from primefield.core.errors import FieldZeroDivisionError, NoSquareRootError
from primefield.core.lookup import get_table
from primefield.log import setup_basic_logger


def banner(msg: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}")


def _fmt(entry: Optional[int]) -> str:
    return "-" if entry is None else str(entry)


def show_field(n: int) -> None:
    F = GF(n, eager=True)
    table = get_table(n)

    banner(f"GF({n}) lookup table ({table.strategy})")
    print("     i  -i  1/i  i^2  sqrt")
    for i in range(n):
        print(
            f"   {i:3} {_fmt(table.additive_inverse(i)):>3} "
            f"{_fmt(table.multiplicative_inverse(i)):>4} "
            f"{_fmt(table.square(i)):>4} {_fmt(table.square_root(i)):>5}"
        )

    a, b = F(3), F(2)
    q = a / b
    print(f"\n   {a} / {b} = {q}   and   {q} * {b} = {q * b}")

    residues = table.quadratic_residues()
    if residues:
        r = F(residues[-1])
        print(f"   sqrt({r}) = {r.sqrt()}, other root = {-r.sqrt()}")

    try:
        F(1) / F(0)
    except FieldZeroDivisionError as exc:
        print(f"   1 / 0 -> {type(exc).__name__}: {exc}")

    non_residues = [i for i in range(1, n) if table.square_root(i) is None]
    if non_residues:
        try:
            F(non_residues[0]).sqrt()
        except NoSquareRootError as exc:
            print(f"   sqrt({non_residues[0]}) -> {type(exc).__name__}: {exc}")

    print(f"   snapshot digest: {table.snapshot().digest[:16]}…")


def main(argv: List[str] | None = None) -> None:
    setup_basic_logger("primefield")
    args = sys.argv[1:] if argv is None else argv
    moduli = [int(a) for a in args] or DEMO_MODULI
    for n in moduli:
        show_field(n)
    banner("DEMO COMPLETE")


if __name__ == "__main__":
    main()
