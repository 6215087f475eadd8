"""Standard chess positions: FEN, legal moves, SAN and UCI notation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional

from .moves import (
    CastleMove,
    Color,
    EnPassantMove,
    Move,
    NormalMove,
    Piece,
    PutMove,
    Role,
    Square,
)


class IllegalMoveError(ValueError):
    """Raised when a move is not legal in a position."""


@dataclass(frozen=True)
class Outcome:
    winner: Optional[Color]

    def __str__(self) -> str:
        if self.winner is Color.WHITE:
            return "1-0"
        if self.winner is Color.BLACK:
            return "0-1"
        return "1/2-1/2"


_KNIGHT = [(1, 2), (2, 1), (-1, 2), (-2, 1), (1, -2), (2, -1), (-1, -2), (-2, -1)]
_ROOK = [(1, 0), (-1, 0), (0, 1), (0, -1)]
_BISHOP = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
_KING = _ROOK + _BISHOP
_SLIDES = {Role.BISHOP: _BISHOP, Role.ROOK: _ROOK, Role.QUEEN: _KING}
_PROMOTIONS = (Role.QUEEN, Role.ROOK, Role.BISHOP, Role.KNIGHT)
_FILES = "abcdefgh"


def _step(sq: Square, df: int, dr: int) -> Optional[Square]:
    f, r = sq.file() + df, sq.rank() + dr
    if 0 <= f < 8 and 0 <= r < 8:
        return Square(r * 8 + f)
    return None


def _attacked(board: Dict[Square, Piece], sq: Square, by: Color) -> bool:
    for d, role in ((_KNIGHT, Role.KNIGHT), (_KING, Role.KING)):
        for df, dr in d:
            s = _step(sq, df, dr)
            if s is not None and board.get(s) == Piece(by, role):
                return True
    pawn_dr = 1 if by is Color.WHITE else -1
    for df in (-1, 1):
        s = _step(sq, df, -pawn_dr)
        if s is not None and board.get(s) == Piece(by, Role.PAWN):
            return True
    for dirs, roles in ((_ROOK, (Role.ROOK, Role.QUEEN)), (_BISHOP, (Role.BISHOP, Role.QUEEN))):
        for df, dr in dirs:
            s = _step(sq, df, dr)
            while s is not None:
                p = board.get(s)
                if p is not None:
                    if p.color is by and p.role in roles:
                        return True
                    break
                s = _step(s, df, dr)
    return False


def _initial_board() -> Dict[Square, Piece]:
    back = [Role.ROOK, Role.KNIGHT, Role.BISHOP, Role.QUEEN, Role.KING,
            Role.BISHOP, Role.KNIGHT, Role.ROOK]
    board: Dict[Square, Piece] = {}
    for f, role in enumerate(back):
        board[Square.from_coords(f, 0)] = Piece(Color.WHITE, role)
        board[Square.from_coords(f, 1)] = Piece(Color.WHITE, Role.PAWN)
        board[Square.from_coords(f, 6)] = Piece(Color.BLACK, Role.PAWN)
        board[Square.from_coords(f, 7)] = Piece(Color.BLACK, role)
    return board


_CASTLING_CHARS = [(Square.H1, "K"), (Square.A1, "Q"), (Square.H8, "k"), (Square.A8, "q")]


def move_to_uci(move: Move) -> str:
    """UCI text of a move, with castling written king to destination."""
    if isinstance(move, NormalMove):
        promo = move.promotion.char() if move.promotion else ""
        return f"{move.from_square}{move.to}{promo}"
    if isinstance(move, EnPassantMove):
        return f"{move.from_square}{move.to}"
    if isinstance(move, CastleMove):
        return f"{move.king}{move_classic_to(move)}"
    if isinstance(move, PutMove):
        return f"{move.role.char().upper()}@{move.to}"
    raise TypeError(f"not a move: {move!r}")


def move_classic_to(move: Move) -> Square:
    """Destination of a move, with castling going to the king's standard square."""
    if isinstance(move, CastleMove):
        if move.king.file() == 4 and move.rook.file() == 7:
            return Square.from_coords(6, move.king.rank())
        if move.king.file() == 4 and move.rook.file() == 0:
            return Square.from_coords(2, move.king.rank())
    return move.to


@dataclass
class Position:
    board: Dict[Square, Piece] = field(default_factory=_initial_board)
    turn: Color = Color.WHITE
    castling: FrozenSet[Square] = frozenset({Square.A1, Square.H1, Square.A8, Square.H8})
    ep_square: Optional[Square] = None
    halfmoves: int = 0
    fullmoves: int = 1

    @staticmethod
    def from_fen(fen: str) -> "Position":
        parts = fen.split()
        if len(parts) not in (4, 6):
            raise ValueError(f"invalid fen: {fen!r}")
        rows = parts[0].split("/")
        if len(rows) != 8:
            raise ValueError(f"invalid fen board: {parts[0]!r}")
        board: Dict[Square, Piece] = {}
        for r, row in zip(range(7, -1, -1), rows):
            f = 0
            for ch in row:
                if ch.isdigit():
                    f += int(ch)
                else:
                    if f >= 8:
                        raise ValueError(f"invalid fen row: {row!r}")
                    board[Square.from_coords(f, r)] = Piece.from_char(ch)
                    f += 1
            if f != 8:
                raise ValueError(f"invalid fen row: {row!r}")
        for color in Color:
            if sum(1 for p in board.values() if p == Piece(color, Role.KING)) != 1:
                raise ValueError("each side needs exactly one king")
        if parts[1] not in ("w", "b"):
            raise ValueError(f"invalid turn: {parts[1]!r}")
        turn = Color.WHITE if parts[1] == "w" else Color.BLACK
        rights = set()
        if parts[2] != "-":
            for ch in parts[2]:
                match = [sq for sq, c in _CASTLING_CHARS if c == ch]
                if not match:
                    raise ValueError(f"invalid castling: {parts[2]!r}")
                rook_sq = match[0]
                color = Color.WHITE if ch.isupper() else Color.BLACK
                king_sq = Square.from_coords(4, rook_sq.rank())
                if (board.get(rook_sq) == Piece(color, Role.ROOK)
                        and board.get(king_sq) == Piece(color, Role.KING)):
                    rights.add(rook_sq)
        ep = None
        if parts[3] != "-":
            ep = Square.parse(parts[3])
            if ep.rank() not in (2, 5):
                raise ValueError(f"invalid en passant square: {parts[3]!r}")
        half, full = 0, 1
        if len(parts) == 6:
            try:
                half, full = int(parts[4]), int(parts[5])
            except ValueError:
                raise ValueError(f"invalid move counters: {fen!r}") from None
        return Position(board, turn, frozenset(rights), ep, half, max(full, 1))

    def to_fen(self) -> str:
        rows = []
        for r in range(7, -1, -1):
            row, empty = "", 0
            for f in range(8):
                p = self.board.get(Square.from_coords(f, r))
                if p is None:
                    empty += 1
                else:
                    row += (str(empty) if empty else "") + p.char()
                    empty = 0
            rows.append(row + (str(empty) if empty else ""))
        castling = "".join(c for sq, c in _CASTLING_CHARS if sq in self.castling) or "-"
        ep = "-"
        if any(isinstance(m, EnPassantMove) for m in self.legal_moves()):
            ep = str(self.ep_square)
        turn = "w" if self.turn is Color.WHITE else "b"
        return f"{'/'.join(rows)} {turn} {castling} {ep} {self.halfmoves} {self.fullmoves}"

    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.board.get(square)

    def _king(self, color: Color) -> Square:
        return next(sq for sq, p in self.board.items() if p == Piece(color, Role.KING))

    def _pseudo_moves(self) -> Iterator[Move]:
        turn = self.turn
        for sq, piece in list(self.board.items()):
            if piece.color is not turn:
                continue
            if piece.role is Role.PAWN:
                yield from self._pawn_moves(sq)
                continue
            if piece.role in (Role.KNIGHT, Role.KING):
                dirs, slide = (_KNIGHT if piece.role is Role.KNIGHT else _KING), False
            else:
                dirs, slide = _SLIDES[piece.role], True
            for df, dr in dirs:
                t = _step(sq, df, dr)
                while t is not None:
                    target = self.board.get(t)
                    if target is None:
                        yield NormalMove(piece.role, sq, None, t)
                    else:
                        if target.color is not turn:
                            yield NormalMove(piece.role, sq, target.role, t)
                        break
                    if not slide:
                        break
                    t = _step(t, df, dr)

    def _pawn_moves(self, sq: Square) -> Iterator[Move]:
        white = self.turn is Color.WHITE
        dr = 1 if white else -1
        start, last = (1, 7) if white else (6, 0)

        def variants(to: Square, capture: Optional[Role]) -> Iterator[Move]:
            if to.rank() == last:
                for promo in _PROMOTIONS:
                    yield NormalMove(Role.PAWN, sq, capture, to, promo)
            else:
                yield NormalMove(Role.PAWN, sq, capture, to)

        one = _step(sq, 0, dr)
        if one is not None and one not in self.board:
            yield from variants(one, None)
            two = _step(sq, 0, 2 * dr)
            if sq.rank() == start and two is not None and two not in self.board:
                yield NormalMove(Role.PAWN, sq, None, two)
        for df in (-1, 1):
            t = _step(sq, df, dr)
            if t is None:
                continue
            target = self.board.get(t)
            if target is not None and target.color is not self.turn:
                yield from variants(t, target.role)
            elif target is None and t == self.ep_square:
                yield EnPassantMove(sq, t)

    def _castle_moves(self) -> Iterator[Move]:
        turn = self.turn
        king = self._king(turn)
        enemy = turn.other()
        if _attacked(self.board, king, enemy):
            return
        back = 0 if turn is Color.WHITE else 7
        for rook in sorted(self.castling):
            if rook.rank() != back or king.rank() != back:
                continue
            if self.board.get(rook) != Piece(turn, Role.ROOK):
                continue
            kingside = rook.file() > king.file()
            king_to = Square.from_coords(6 if kingside else 2, back)
            rook_to = Square.from_coords(5 if kingside else 3, back)
            files = [king.file(), rook.file(), king_to.file(), rook_to.file()]
            span = range(min(files), max(files) + 1)
            if any(Square.from_coords(f, back) in self.board
                   and Square.from_coords(f, back) not in (king, rook) for f in span):
                continue
            step = 1 if king_to.file() > king.file() else -1
            path = range(king.file(), king_to.file() + step, step)
            if any(_attacked(self.board, Square.from_coords(f, back), enemy) for f in path):
                continue
            yield CastleMove(king, rook)

    def _board_after(self, move: Move) -> Dict[Square, Piece]:
        board = dict(self.board)
        if isinstance(move, NormalMove):
            del board[move.from_square]
            board[move.to] = Piece(self.turn, move.promotion or move.role)
        elif isinstance(move, EnPassantMove):
            del board[move.from_square]
            board.pop(Square.from_coords(move.to.file(), move.from_square.rank()), None)
            board[move.to] = Piece(self.turn, Role.PAWN)
        elif isinstance(move, CastleMove):
            del board[move.king]
            del board[move.rook]
            rank = move.king.rank()
            kingside = move.rook.file() > move.king.file()
            board[Square.from_coords(6 if kingside else 2, rank)] = Piece(self.turn, Role.KING)
            board[Square.from_coords(5 if kingside else 3, rank)] = Piece(self.turn, Role.ROOK)
        else:
            raise IllegalMoveError(f"move not playable here: {move!r}")
        return board

    def _leaves_king_safe(self, move: Move) -> bool:
        board = self._board_after(move)
        king = next(sq for sq, p in board.items() if p == Piece(self.turn, Role.KING))
        return not _attacked(board, king, self.turn.other())

    def legal_moves(self) -> List[Move]:
        moves = [m for m in self._pseudo_moves() if self._leaves_king_safe(m)]
        moves.extend(m for m in self._castle_moves() if self._leaves_king_safe(m))
        return moves

    def is_legal(self, move: Move) -> bool:
        return move in self.legal_moves()

    def play(self, move: Move) -> "Position":
        """Return the position after a legal move."""
        if not self.is_legal(move):
            raise IllegalMoveError(f"illegal move: {move!r}")
        board = self._board_after(move)
        color = self.turn
        back = 0 if color is Color.WHITE else 7
        rights = set(self.castling)
        if isinstance(move, CastleMove) or (
                isinstance(move, NormalMove) and move.role is Role.KING):
            rights = {sq for sq in rights if sq.rank() != back}
        rights.discard(move.from_square)
        rights.discard(move.to)
        ep = None
        if (isinstance(move, NormalMove) and move.role is Role.PAWN
                and abs(int(move.to) - int(move.from_square)) == 16):
            ep = Square((int(move.to) + int(move.from_square)) // 2)
        resets = isinstance(move, EnPassantMove) or (
            isinstance(move, NormalMove) and (move.role is Role.PAWN or move.capture is not None))
        return Position(
            board,
            color.other(),
            frozenset(rights),
            ep,
            0 if resets else self.halfmoves + 1,
            self.fullmoves + (1 if color is Color.BLACK else 0),
        )

    def san(self, move: Move) -> str:
        """Standard algebraic notation of a move, without check marks."""
        if isinstance(move, CastleMove):
            return "O-O" if move.rook.file() > move.king.file() else "O-O-O"
        if isinstance(move, EnPassantMove):
            return f"{_FILES[move.from_square.file()]}x{move.to}"
        if isinstance(move, PutMove):
            return move_to_uci(move)
        if move.role is Role.PAWN:
            text = f"{_FILES[move.from_square.file()]}x{move.to}" if move.capture else str(move.to)
            if move.promotion:
                text += "=" + move.promotion.char().upper()
            return text
        rivals = [m.from_square for m in self.legal_moves()
                  if isinstance(m, NormalMove) and m.role is move.role
                  and m.to == move.to and m.from_square != move.from_square]
        disamb = ""
        if rivals:
            if all(s.file() != move.from_square.file() for s in rivals):
                disamb = _FILES[move.from_square.file()]
            elif all(s.rank() != move.from_square.rank() for s in rivals):
                disamb = str(move.from_square.rank() + 1)
            else:
                disamb = str(move.from_square)
        capture = "x" if move.capture else ""
        return f"{move.role.char().upper()}{disamb}{capture}{move.to}"

    def parse_uci(self, uci: str) -> Move:
        """Find the legal move written as UCI text."""
        text = uci.strip()
        if len(text) not in (4, 5):
            raise IllegalMoveError(f"invalid uci move: {uci!r}")
        for m in self.legal_moves():
            if move_to_uci(m) == text:
                return m
            if isinstance(m, CastleMove) and text == f"{m.king}{m.rook}":
                return m
        raise IllegalMoveError(f"illegal uci move: {uci!r}")

    def _insufficient_material(self) -> bool:
        others = [(sq, p) for sq, p in self.board.items() if p.role is not Role.KING]
        if any(p.role in (Role.PAWN, Role.ROOK, Role.QUEEN) for _, p in others):
            return False
        if len(others) <= 1:
            return True
        if all(p.role is Role.BISHOP for _, p in others):
            return len({(sq.file() + sq.rank()) % 2 for sq, _ in others}) == 1
        return False

    def outcome(self) -> Optional[Outcome]:
        """The game result, or None while the game goes on."""
        if not self.legal_moves():
            if _attacked(self.board, self._king(self.turn), self.turn.other()):
                return Outcome(self.turn.other())
            return Outcome(None)
        if self._insufficient_material():
            return Outcome(None)
        return None


def ucimovelist_to_sanlist(position: Position, movelist: List[str]) -> List[str]:
    """SAN of a UCI move list, stopping at the first move that does not apply."""
    result: List[str] = []
    for uci in movelist:
        try:
            move = position.parse_uci(str(uci))
        except IllegalMoveError:
            break
        result.append(position.san(move))
        position = position.play(move)
    return result