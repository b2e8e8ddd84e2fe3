"""Square type alias and coordinate helpers.

Board layout (row, column), both 0–7:
    row 0 is rank 1 (white's home rank), row 7 is rank 8
    column 0 is file a, column 7 is file h

So ``(0, 0)`` is a1, white's queenside rook corner, and ``(7, 7)`` is h8.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (row, col)

FILES = "abcdefgh"
RANKS = "12345678"


def is_on_board(sq: Square) -> bool:
    """Whether both coordinates lie in 0–7."""
    row, col = sq
    return 0 <= row < 8 and 0 <= col < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (0, 0) → 'a1', (7, 7) → 'h8'."""
    row, col = sq
    return FILES[col] + RANKS[row]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (3, 4)."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return (RANKS.index(name[1]), FILES.index(name[0]))


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = ((0, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((1, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((2, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((3, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((4, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((5, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((6, c) for c in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = ((7, c) for c in range(8))
