"""Board model and flip primitives for Othello."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from othello.errors import InvalidMove

BOARD_SIZE = 8
NUM_CELLS = BOARD_SIZE * BOARD_SIZE

# Cell and player tags. The values double as the wire encoding.
EMPTY = -1
WHITE = 0
BLACK = 1

# Winner tags
NO_WINNER = -1
DRAW = -2

DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

_CHAR_TO_CELL = {".": EMPTY, "-": EMPTY, "X": BLACK, "B": BLACK, "O": WHITE, "W": WHITE}
_CELL_TO_CHAR = {EMPTY: ".", BLACK: "X", WHITE: "O"}


def _build_rays() -> Tuple[Tuple[Tuple[int, ...], ...], ...]:
    rays = []
    for index in range(NUM_CELLS):
        row, col = divmod(index, BOARD_SIZE)
        per_cell = []
        for dr, dc in DIRECTIONS:
            ray = []
            r, c = row + dr, col + dc
            while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE:
                ray.append(r * BOARD_SIZE + c)
                r += dr
                c += dc
            if len(ray) >= 2:
                per_cell.append(tuple(ray))
        rays.append(tuple(per_cell))
    return tuple(rays)


# Cells walked outward from each index, one tuple per direction.
# Rays shorter than two cells can never flank a run and are dropped.
RAYS = _build_rays()


def opponent(player: int) -> int:
    return 1 - player


def flips_on(cells: Sequence[int], index: int, player: int) -> List[int]:
    """Return the cells flipped if ``player`` places a disc on ``index``."""
    if cells[index] != EMPTY:
        return []

    other = opponent(player)
    flipped: List[int] = []
    for ray in RAYS[index]:
        run: List[int] = []
        for cell in ray:
            value = cells[cell]
            if value == other:
                run.append(cell)
                continue
            if value == player and run:
                flipped.extend(run)
            break
    return flipped


def is_legal_on(cells: Sequence[int], index: int, player: int) -> bool:
    if cells[index] != EMPTY:
        return False

    other = opponent(player)
    for ray in RAYS[index]:
        if cells[ray[0]] != other:
            continue
        for cell in ray[1:]:
            value = cells[cell]
            if value == other:
                continue
            if value == player:
                return True
            break
    return False


class Board:
    """Immutable-by-convention 8x8 Othello board backed by an int8 array."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Optional[np.ndarray] = None) -> None:
        if cells is None:
            cells = np.full(NUM_CELLS, EMPTY, dtype=np.int8)
            cells[27] = WHITE
            cells[28] = BLACK
            cells[35] = BLACK
            cells[36] = WHITE
        self._cells = cells

    @classmethod
    def initial(cls) -> "Board":
        return cls()

    @classmethod
    def from_cells(cls, cells: Iterable[int]) -> "Board":
        values = [int(value) for value in cells]
        if len(values) != NUM_CELLS:
            raise ValueError(f"Expected {NUM_CELLS} cells, got {len(values)}")
        if any(value not in (EMPTY, BLACK, WHITE) for value in values):
            raise ValueError("Cells must be EMPTY, BLACK or WHITE")
        return cls(np.array(values, dtype=np.int8))

    @classmethod
    def from_string(cls, diagram: str) -> "Board":
        """Parse a diagram of '.', 'X' (black) and 'O' (white), whitespace ignored."""
        chars = [ch for ch in diagram.upper() if not ch.isspace()]
        try:
            values = [_CHAR_TO_CELL[ch] for ch in chars]
        except KeyError as exc:
            raise ValueError(f"Unknown board character: {exc.args[0]!r}") from None
        return cls.from_cells(values)

    @property
    def cells(self) -> np.ndarray:
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def to_list(self) -> List[int]:
        return self._cells.tolist()

    def __getitem__(self, index: int) -> int:
        return int(self._cells[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash(self._cells.tobytes())

    def __str__(self) -> str:
        rows = []
        for row in range(BOARD_SIZE):
            start = row * BOARD_SIZE
            rows.append(" ".join(_CELL_TO_CHAR[int(v)] for v in self._cells[start : start + BOARD_SIZE]))
        return "\n".join(rows)

    def flips(self, index: int, player: int) -> List[int]:
        if not 0 <= index < NUM_CELLS:
            return []
        return flips_on(self.to_list(), index, player)

    def is_legal(self, index: int, player: int) -> bool:
        if not 0 <= index < NUM_CELLS:
            return False
        return is_legal_on(self.to_list(), index, player)

    def has_move(self, player: int) -> bool:
        cells = self.to_list()
        return any(is_legal_on(cells, index, player) for index in range(NUM_CELLS))

    def apply(self, index: int, player: int) -> "Board":
        """Return the board after ``player`` plays ``index``; ``self`` is untouched."""
        if not 0 <= index < NUM_CELLS:
            raise InvalidMove(f"Cell index out of range: {index}")
        if self._cells[index] != EMPTY:
            raise InvalidMove(f"Cell {index} is occupied")

        flipped = flips_on(self.to_list(), index, player)
        if not flipped:
            raise InvalidMove(f"Cell {index} flips nothing for player {player}")

        cells = self._cells.copy()
        cells[index] = player
        cells[flipped] = player
        return Board(cells)

    def counts(self) -> Tuple[int, int]:
        """Return (black, white) disc counts."""
        black = int(np.count_nonzero(self._cells == BLACK))
        white = int(np.count_nonzero(self._cells == WHITE))
        return black, white

    def empty_count(self) -> int:
        return int(np.count_nonzero(self._cells == EMPTY))

    def is_full(self) -> bool:
        return self.empty_count() == 0

    def is_terminal(self) -> bool:
        if self.is_full():
            return True
        return not self.has_move(BLACK) and not self.has_move(WHITE)

    def winner(self) -> int:
        """Compare disc counts. Only meaningful once the position is terminal."""
        black, white = self.counts()
        if black > white:
            return BLACK
        if white > black:
            return WHITE
        return DRAW
