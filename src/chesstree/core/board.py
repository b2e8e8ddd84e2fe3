"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chesstree.core.enums import Color, PieceType
from chesstree.core.piece import Piece
from chesstree.core.types import Square, is_on_board

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional piece references.

    Assigning a piece to a square also updates ``piece.position``, which
    keeps both sides of the piece/cell relation in step.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        if not is_on_board(sq):
            raise IndexError(f"Square off the board: {sq}")
        row, col = sq
        return self._grid[row][col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if not is_on_board(sq):
            raise IndexError(f"Square off the board: {sq}")
        row, col = sq
        self._grid[row][col] = piece
        if piece is not None:
            piece.position = sq

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def place(self, piece: Piece, sq: Square) -> Piece:
        """Put *piece* on *sq* and return it."""
        self[sq] = piece
        return piece

    def remove(self, sq: Square) -> Piece | None:
        """Clear *sq*, returning whatever stood there."""
        piece = self[sq]
        self[sq] = None
        return piece

    # -- Query helpers ------------------------------------------------------

    def __iter__(self) -> Iterator[Piece]:
        """All pieces, row by row from a1 to h8."""
        for row in self._grid:
            for piece in row:
                if piece is not None:
                    yield piece

    def pieces(self, color: Color) -> list[Piece]:
        """All of *color*'s pieces."""
        return [p for p in self if p.color == color]

    def pieces_by_color(self) -> tuple[list[Piece], list[Piece]]:
        """``(white_pieces, black_pieces)``."""
        white: list[Piece] = []
        black: list[Piece] = []
        for piece in self:
            (white if piece.color == Color.WHITE else black).append(piece)
        return white, black

    def king_square(self, color: Color) -> Square:
        """Scan for *color*'s king."""
        for piece in self:
            if piece.color == color and piece.piece_type == PieceType.KING:
                return piece.position
        raise ValueError(f"No {color.name} king on board")

    def snapshot(self) -> tuple[tuple[Piece | None, ...], ...]:
        """Cell contents as nested tuples, for cheap before/after comparison."""
        return tuple(tuple(row) for row in self._grid)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(8):
            b[(1, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[(6, col)] = Piece(Color.BLACK, PieceType.PAWN)

        for col, pt in enumerate(_BACK_RANK):
            b[(0, col)] = Piece(Color.WHITE, pt)
            b[(7, col)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for col in range(8):
                p = self._grid[rank][col]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
