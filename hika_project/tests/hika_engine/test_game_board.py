"""
测试GameBoard类的功能

测试越界检查、放置/移动棋子、占位索引同步和撤销记录。
"""

import pytest
from hika_project.src.hika_engine.rules_engine import (
    Vec, Move, Piece, GameBoard, MoveCache, BoardValidator, FLAG_FIRST_MOVE, parse_layout
)
from hika_project.src.hika_engine.utils import OutOfBoundsError


def scan_pairs(board: GameBoard):
    """逐格扫描得到 (位置, 棋子身份) 集合"""
    return {(pos, id(piece)) for pos, piece in board.iter_cells() if piece is not None}


def index_pairs(board: GameBoard):
    return {(poi.pos, id(poi.piece)) for poi in board.get_pois()}


class TestGameBoard:
    """GameBoard类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.cache = MoveCache()
        size, placements = parse_layout("4,4,2,2 R3,1p2/4|3k")
        self.board = GameBoard.from_placements(size, placements, self.cache)

    def test_bounds(self):
        """测试越界检查"""
        assert self.board.is_in_bounds(Vec(0, 0, 0, 0))
        assert self.board.is_in_bounds(Vec(3, 3, 1, 1))
        assert not self.board.is_in_bounds(Vec(4, 0, 0, 0))
        assert not self.board.is_in_bounds(Vec(0, 0, 2, 0))
        assert not self.board.is_in_bounds(Vec(0, 0, 0, -1))

        with pytest.raises(OutOfBoundsError):
            self.board.get_piece(Vec(0, 4))
        with pytest.raises(OutOfBoundsError):
            self.board.set_piece(Vec(-1), Piece("R", 0))
        with pytest.raises(OutOfBoundsError):
            self.board.move(Move(Vec(0, 0), Vec(0, 0, 0, 2)))

    def test_grid_shape(self):
        """测试棋盘数组形状"""
        assert self.board.grid.shape == (2, 2, 4, 4)
        assert self.board.get_piece(Vec(0, 0)).id == "R"
        assert self.board.get_piece(Vec(1, 1)).team == 1
        assert self.board.get_piece(Vec(3, 0, 0, 1)).id == "K"
        assert self.board.piece_count() == 3

    def test_set_piece(self):
        """测试放置棋子返回原棋子并同步索引"""
        rook = self.board.get_piece(Vec(0, 0))
        queen = Piece("Q", 0)

        previous = self.board.set_piece(Vec(0, 0), queen)
        assert previous is rook
        assert self.board.get_piece(Vec(0, 0)) is queen
        assert scan_pairs(self.board) == index_pairs(self.board)

        previous = self.board.set_piece(Vec(0, 0), None)
        assert previous is queen
        assert self.board.piece_count() == 2
        assert scan_pairs(self.board) == index_pairs(self.board)

        assert self.board.set_piece(Vec(2, 2), Piece("N", 1)) is None
        assert self.board.piece_count() == 3
        assert scan_pairs(self.board) == index_pairs(self.board)

    def test_move_and_capture(self):
        """测试移动和吃子"""
        rook = self.board.get_piece(Vec(0, 0))
        pawn = self.board.get_piece(Vec(1, 1))

        captured = self.board.move(Move(Vec(0, 0), Vec(0, 1)))
        assert captured is None
        assert self.board.get_piece(Vec(0, 1)) is rook
        assert self.board.get_piece(Vec(0, 0)) is None

        captured = self.board.move(Move(Vec(0, 1), Vec(1, 1)))
        assert captured is pawn
        assert self.board.get_piece(Vec(1, 1)) is rook
        assert self.board.piece_count() == 2
        assert scan_pairs(self.board) == index_pairs(self.board)

    def test_first_move_flag_cleared(self):
        """测试移动后清除首步标志，其他标志保留"""
        pawn = self.board.get_piece(Vec(1, 1))
        assert FLAG_FIRST_MOVE in pawn.flags
        self.board.move(Move(Vec(1, 1), Vec(1, 2)))
        assert FLAG_FIRST_MOVE not in pawn.flags

        king = self.board.get_piece(Vec(3, 0, 0, 1))
        self.board.move(Move(Vec(3, 0, 0, 1), Vec(2, 0, 0, 1)))
        assert king.flags == {1, 2}

    def test_cache_invalidation(self):
        """测试修改入口清空走法缓存"""
        self.cache.store(Vec(0, 0), [Move(Vec(0, 0), Vec(1, 0))])
        self.board.move(Move(Vec(0, 0), Vec(1, 0)), invalidate_cache=False)
        assert len(self.cache) == 1

        self.board.move(Move(Vec(1, 0), Vec(0, 0)))
        assert len(self.cache) == 0

        self.cache.store(Vec(0, 0), [])
        self.board.set_piece(Vec(3, 3), Piece("B", 0))
        assert len(self.cache) == 0

    def test_undo_restores_exactly(self):
        """测试撤销记录精确恢复棋盘、索引顺序和标志"""
        pawn = self.board.get_piece(Vec(1, 1))
        before_cells = list(self.board.iter_cells())
        before_pois = [(poi.pos, id(poi.piece)) for poi in self.board.get_pois()]

        record = self.board.apply_undoable(Move(Vec(1, 1), Vec(0, 0)))
        assert self.board.get_piece(Vec(0, 0)) is pawn
        assert FLAG_FIRST_MOVE not in pawn.flags

        self.board.undo(record)
        assert list(self.board.iter_cells()) == before_cells
        assert [(poi.pos, id(poi.piece)) for poi in self.board.get_pois()] == before_pois
        assert FLAG_FIRST_MOVE in pawn.flags

    def test_index_invariant_after_mutations(self):
        """测试任意修改序列后占位索引与棋盘一致"""
        validator = BoardValidator()
        self.board.set_piece(Vec(2, 2, 1, 1), Piece("N", 0))
        self.board.move(Move(Vec(0, 0), Vec(1, 1)))
        self.board.set_piece(Vec(1, 1), Piece("B", 1))
        self.board.move(Move(Vec(3, 0, 0, 1), Vec(2, 2, 1, 1)))
        self.board.set_piece(Vec(3, 3), None)
        self.board.move(Move(Vec(0, 3), Vec(0, 2)))

        assert scan_pairs(self.board) == index_pairs(self.board)
        is_valid, errors = validator.full_validation(self.board)
        assert is_valid, errors
        count = sum(1 for _, piece in self.board.iter_cells() if piece is not None)
        assert count == len(self.board.get_pois())

    def test_iteration_order(self):
        """测试遍历顺序为 w -> z -> y -> x"""
        positions = [pos for pos, _ in self.board.iter_cells()]
        assert len(positions) == 4 * 4 * 2 * 2
        assert positions[0] == Vec(0, 0, 0, 0)
        assert positions[1] == Vec(1, 0, 0, 0)
        assert positions[4] == Vec(0, 1, 0, 0)
        assert positions[16] == Vec(0, 0, 1, 0)
        assert positions[32] == Vec(0, 0, 0, 1)
        assert positions[-1] == Vec(3, 3, 1, 1)

        visited = []
        self.board.for_each_cell(lambda pos, piece: visited.append(pos))
        assert visited == positions

    def test_pois_is_copy(self):
        """测试占位快照是副本"""
        pois = self.board.get_pois()
        self.board.set_piece(Vec(3, 3), Piece("B", 0))
        assert len(pois) == 3
        assert len(self.board.get_pois()) == 4
