"""
测试BoardValidator类的功能
"""

from hika_project.src.hika_engine.rules_engine import (
    Vec, Piece, GameBoard, BoardValidator, DEFAULT_LAYOUT, parse_layout
)


def build_board(layout: str) -> GameBoard:
    size, placements = parse_layout(layout)
    return GameBoard.from_placements(size, placements)


class TestBoardValidator:
    """BoardValidator类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.validator = BoardValidator()
        self.board = build_board(DEFAULT_LAYOUT)

    def test_valid_board(self):
        """测试合法棋盘"""
        is_valid, errors = self.validator.full_validation(self.board)
        assert is_valid
        assert errors == []

    def test_index_missing_entry(self):
        """测试绕过修改入口写入棋盘时检测到索引缺失"""
        self.board.grid[Vec(3, 3).to_index()] = Piece("Q", 0)
        is_valid, errors = self.validator.validate_occupancy_index(self.board)
        assert not is_valid
        assert any("3,3,0,0" in error for error in errors)

    def test_index_extra_entry(self):
        """测试清空格子但未更新索引"""
        self.board.grid[Vec(0, 0).to_index()] = None
        is_valid, errors = self.validator.validate_occupancy_index(self.board)
        assert not is_valid
        assert any("0,0,0,0" in error for error in errors)

    def test_duplicate_piece(self):
        """测试同一棋子出现在两个格子"""
        rook = self.board.get_piece(Vec(0, 0))
        self.board.grid[Vec(3, 3).to_index()] = rook
        is_valid, errors = self.validator.validate_piece_fields(self.board)
        assert not is_valid

    def test_invalid_piece_fields(self):
        """测试无效的棋子字段"""
        self.board.set_piece(Vec(3, 3), Piece("", 0))
        self.board.set_piece(Vec(4, 4), Piece("R", "white"))
        is_valid, errors = self.validator.validate_piece_fields(self.board)
        assert not is_valid
        assert len(errors) == 2

    def test_validation_report(self):
        """测试验证报告"""
        report = self.validator.get_validation_report(self.board)
        assert report['overall_valid']
        assert report['total_errors'] == 0
        assert report['piece_count'] == 32
        assert report['royal_pieces'] == {0: 1, 1: 1}
        assert set(report['validations']) == {'structure', 'occupancy_index', 'piece_fields'}

        self.board.grid[Vec(3, 3).to_index()] = Piece("Q", 0)
        report = self.validator.get_validation_report(self.board)
        assert not report['overall_valid']
        assert report['total_errors'] > 0
        assert not report['validations']['occupancy_index']['valid']
