"""Pipe pieces: the catalog of types and how rotation reorients them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.models.errors import InvalidPieceType, InvalidRotation


class Direction(StrEnum):
    N = "N"
    E = "E"
    S = "S"
    W = "W"

    @property
    def opposite(self) -> Direction:
        return _OPPOSITE[self]

    @property
    def clockwise(self) -> Direction:
        """The direction this one points to after a 90° clockwise turn."""
        return _CLOCKWISE[self]

    @property
    def offset(self) -> tuple[int, int]:
        """(row, col) step towards the neighbouring cell."""
        return _OFFSETS[self]


_OPPOSITE = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}
_CLOCKWISE = {
    Direction.N: Direction.E,
    Direction.E: Direction.S,
    Direction.S: Direction.W,
    Direction.W: Direction.N,
}
_OFFSETS = {
    Direction.N: (-1, 0),
    Direction.E: (0, 1),
    Direction.S: (1, 0),
    Direction.W: (0, -1),
}

ALL_DIRECTIONS: frozenset[Direction] = frozenset(Direction)


class PieceType(StrEnum):
    I = "I"  # noqa: E741
    L = "L"
    T = "T"
    CROSS = "+"


# -- catalog ------------------------------------------------------------------

# Open directions at rotation 0.  T is closed on its west side.
_CATALOG: dict[PieceType, frozenset[Direction]] = {
    PieceType.I: frozenset({Direction.N, Direction.S}),
    PieceType.L: frozenset({Direction.S, Direction.E}),
    PieceType.T: frozenset({Direction.N, Direction.E, Direction.S}),
    PieceType.CROSS: ALL_DIRECTIONS,
}


def coerce_piece_type(value: PieceType | str) -> PieceType:
    """Return *value* as a registered ``PieceType`` or raise ``InvalidPieceType``."""
    try:
        piece_type = PieceType(value)
    except ValueError:
        raise InvalidPieceType(value) from None
    if piece_type not in _CATALOG:
        raise InvalidPieceType(value)
    return piece_type


def base_open_directions(piece_type: PieceType | str) -> frozenset[Direction]:
    return _CATALOG[coerce_piece_type(piece_type)]


# -- orientation --------------------------------------------------------------

ROTATIONS: tuple[int, ...] = (0, 90, 180, 270)


def check_rotation(rotation: int) -> int:
    if isinstance(rotation, bool) or not isinstance(rotation, int):
        raise InvalidRotation(rotation)
    if rotation not in ROTATIONS:
        raise InvalidRotation(rotation)
    return rotation


def effective_open_directions(
    piece_type: PieceType | str, rotation: int
) -> frozenset[Direction]:
    """Open directions of *piece_type* after turning it *rotation* degrees clockwise."""
    steps = check_rotation(rotation) // 90
    directions = base_open_directions(piece_type)
    for _ in range(steps):
        directions = frozenset(d.clockwise for d in directions)
    return directions


def rotation_for(
    piece_type: PieceType | str, directions: frozenset[Direction] | set[Direction]
) -> int | None:
    """Return the smallest rotation that opens exactly *directions*, if any."""
    wanted = frozenset(directions)
    for rotation in ROTATIONS:
        if effective_open_directions(piece_type, rotation) == wanted:
            return rotation
    return None


# -- placed pieces ------------------------------------------------------------


@dataclass(frozen=True)
class PlacedPiece:
    type: PieceType
    rotation: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", coerce_piece_type(self.type))
        check_rotation(self.rotation)

    @property
    def open_directions(self) -> frozenset[Direction]:
        return effective_open_directions(self.type, self.rotation)

    def rotated(self) -> PlacedPiece:
        """Return this piece turned a further 90° clockwise."""
        return PlacedPiece(self.type, (self.rotation + 90) % 360)
