"""Piece model and per-kind move templates."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from itertools import permutations, product

from chesstree.core.enums import Color, PieceType
from chesstree.core.move_tree import MoveTree, MoveTreeNode, build_ray
from chesstree.core.types import Square, is_on_board

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

KNIGHT_OFFSETS: tuple[Square, ...] = tuple(
    (dr, dc) for dr, dc in permutations((1, -1, 2, -2), 2) if dr + dc != 0
)
KING_OFFSETS: tuple[Square, ...] = tuple(
    (dr, dc) for dr, dc in product((-1, 0, 1), repeat=2) if (dr, dc) != (0, 0)
)

BISHOP_DIRS: tuple[Square, ...] = ((1, 1), (-1, 1), (1, -1), (-1, -1))
ROOK_DIRS: tuple[Square, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
QUEEN_DIRS: tuple[Square, ...] = KING_OFFSETS

# Row a pawn of each color lands on after its two-square advance.
DOUBLE_STEP_ROW: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}


# -- Templates ---------------------------------------------------------------


def _build_pawn_tree(color: Color, fresh: bool) -> MoveTree:
    direction = color.pawn_direction
    tree = MoveTree()
    forward = tree.root.add_child((direction, 0))
    if fresh:
        forward.add_child((2 * direction, 0))
    tree.root.add_child((direction, 1))
    tree.root.add_child((direction, -1))
    return tree


def _build_leaper_tree(offsets: tuple[Square, ...]) -> MoveTree:
    tree = MoveTree()
    for offset in offsets:
        tree.root.add_child(offset)
    return tree


def _build_slider_tree(directions: tuple[Square, ...]) -> MoveTree:
    tree = MoveTree()
    for direction in directions:
        tree.root.add_child(build_ray(direction))
    return tree


@lru_cache(maxsize=None)
def move_template(
    piece_type: PieceType,
    color: Color = Color.WHITE,
    fresh: bool = False,
) -> MoveTree:
    """Shared relative-offset blueprint for *piece_type*.

    The returned tree is cached and shared by every piece of that kind.
    Never mutate it; :meth:`Piece.possible_squares` works on a clone.
    *color* and *fresh* (never moved) only shape the pawn template.
    """
    if piece_type == PieceType.PAWN:
        return _build_pawn_tree(color, fresh)
    if piece_type == PieceType.KNIGHT:
        return _build_leaper_tree(KNIGHT_OFFSETS)
    if piece_type == PieceType.KING:
        return _build_leaper_tree(KING_OFFSETS)
    if piece_type == PieceType.BISHOP:
        return _build_slider_tree(BISHOP_DIRS)
    if piece_type == PieceType.ROOK:
        return _build_slider_tree(ROOK_DIRS)
    return _build_slider_tree(QUEEN_DIRS)


# -- Piece -------------------------------------------------------------------


@dataclass(slots=True, eq=False)
class Piece:
    """A piece on the board.

    Pieces compare by identity: two white knights are different pieces.
    ``position`` must always match the board cell holding the piece, so
    only :class:`~chesstree.core.board.Board` assignment should change it.

    ``move_count`` matters for pawns (0 = never moved, 1 = just made its
    first move).  ``has_moved`` matters for kings and rooks (castling).
    """

    color: Color
    piece_type: PieceType
    position: Square = (0, 0)
    move_count: int = 0
    has_moved: bool = False

    # ── Geometry ─────────────────────────────────────────────────────────

    def template(self) -> MoveTree:
        """Cached blueprint for this piece's kind (do not mutate)."""
        if self.piece_type == PieceType.PAWN:
            return move_template(PieceType.PAWN, self.color, self.move_count == 0)
        return move_template(self.piece_type)

    def possible_squares(self) -> MoveTree:
        """Clone of the template anchored at ``position``, clipped to the board.

        Each ray is cut at its first off-board node; everything past it is
        off the board as well.
        """
        tree = self.template().clone().translate(self.position)
        stranded: list[MoveTreeNode] = [
            child
            for node in tree.each()
            if is_on_board(node.square)
            for child in node.children
            if not is_on_board(child.square)
        ]
        for node in stranded:
            tree.trim_branch(node)
        return tree

    def can_capture(self, target: Piece | None) -> bool:
        """Whether *target* lies on a square this piece could take it on."""
        if target is None or target.color == self.color:
            return False
        if self.piece_type == PieceType.PAWN:
            return self.attacks_diagonally(target.position) or self.can_take_en_passant(
                target
            )
        return target.position in self.possible_squares().to_list()

    # ── Pawn helpers ─────────────────────────────────────────────────────

    def attacks_diagonally(self, sq: Square) -> bool:
        """Pawn only: *sq* is one row ahead and one column aside."""
        row, col = self.position
        return sq[0] == row + self.color.pawn_direction and abs(sq[1] - col) == 1

    def can_take_en_passant(self, target: Piece) -> bool:
        """Pawn only: *target* is an enemy pawn that just double-stepped beside us."""
        if self.piece_type != PieceType.PAWN or target.piece_type != PieceType.PAWN:
            return False
        if target.color == self.color or target.move_count != 1:
            return False
        row, col = self.position
        t_row, t_col = target.position
        return (
            t_row == row
            and abs(t_col - col) == 1
            and t_row == DOUBLE_STEP_ROW[target.color]
        )

    # ── Properties / serialisation ───────────────────────────────────────

    @property
    def points(self) -> int:
        return self.piece_type.points

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    def describe(self) -> str:
        return f"{self.color} {self.piece_type}"

    @classmethod
    def from_char(cls, char: str, position: Square = (0, 0)) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype, position)
