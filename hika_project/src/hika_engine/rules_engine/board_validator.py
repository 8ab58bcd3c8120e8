"""
棋盘一致性验证器

检查棋盘数组与占位索引是否严格同步，以及棋子数据是否完整。
"""

from typing import List, Tuple, Dict, Any, Iterable

from .game_board import GameBoard
from .piece import Piece


class BoardValidator:
    """
    棋盘验证器

    提供棋盘结构、占位索引和棋子数据的验证功能。
    """

    def __init__(self, royal_piece_ids: Iterable[str] = ('K',)):
        self.royal_piece_ids = frozenset(royal_piece_ids)

    def validate_board_structure(self, board: GameBoard) -> Tuple[bool, List[str]]:
        """
        验证棋盘数组形状与尺寸一致

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        expected = board.size.to_index()
        if board.grid.shape != expected:
            errors.append(f"棋盘数组形状错误: {board.grid.shape}, 应为{expected}")

        if board.grid.dtype != object:
            errors.append(f"棋盘数据类型错误: {board.grid.dtype}, 应为object")

        return len(errors) == 0, errors

    def validate_occupancy_index(self, board: GameBoard) -> Tuple[bool, List[str]]:
        """
        验证占位索引与逐格扫描结果完全相同

        比较 (位置, 棋子身份) 集合。
        """
        errors = []

        scanned = {(pos, id(piece)) for pos, piece in board.iter_cells() if piece is not None}
        indexed = {(poi.pos, id(poi.piece)) for poi in board.get_pois()}

        for pos, _ in sorted(scanned - indexed, key=lambda item: item[0].to_index()):
            errors.append(f"占位索引缺少棋子: {pos.serialize()}")
        for pos, _ in sorted(indexed - scanned, key=lambda item: item[0].to_index()):
            errors.append(f"占位索引存在多余条目: {pos.serialize()}")

        if board.piece_count() != len(scanned):
            errors.append(f"占位索引数量 {board.piece_count()} 与棋盘棋子数 {len(scanned)} 不一致")

        return len(errors) == 0, errors

    def validate_piece_fields(self, board: GameBoard) -> Tuple[bool, List[str]]:
        """验证每个棋子的类型、队伍和标志字段"""
        errors = []
        seen = set()

        for pos, piece in board.iter_cells():
            if piece is None:
                continue
            where = pos.serialize()
            if not isinstance(piece, Piece):
                errors.append(f"{where} 处不是棋子对象: {piece!r}")
                continue
            if id(piece) in seen:
                errors.append(f"{where} 处的棋子同时出现在多个格子")
            seen.add(id(piece))
            if not isinstance(piece.id, str) or not piece.id:
                errors.append(f"{where} 处棋子类型无效: {piece.id!r}")
            if not isinstance(piece.team, int):
                errors.append(f"{where} 处棋子队伍无效: {piece.team!r}")
            if not all(isinstance(flag, int) for flag in piece.flags):
                errors.append(f"{where} 处棋子标志无效: {piece.flags!r}")

        return len(errors) == 0, errors

    def count_royal_pieces(self, board: GameBoard) -> Dict[int, int]:
        """统计每个队伍的王类棋子数量"""
        counts = {team: 0 for team in board.teams()}
        for poi in board.get_pois():
            if poi.piece.id in self.royal_piece_ids:
                counts[poi.piece.team] += 1
        return counts

    def full_validation(self, board: GameBoard) -> Tuple[bool, List[str]]:
        """
        完整的棋盘验证

        Returns:
            Tuple[bool, List[str]]: (是否合法, 所有错误信息列表)
        """
        all_errors = []

        validations = [
            self.validate_board_structure,
            self.validate_occupancy_index,
            self.validate_piece_fields
        ]

        for validation_func in validations:
            _, errors = validation_func(board)
            all_errors.extend(errors)

        return len(all_errors) == 0, all_errors

    def get_validation_report(self, board: GameBoard) -> Dict[str, Any]:
        """
        获取详细的验证报告

        Returns:
            Dict[str, Any]: 验证报告
        """
        report = {
            'overall_valid': True,
            'total_errors': 0,
            'piece_count': board.piece_count(),
            'royal_pieces': self.count_royal_pieces(board),
            'validations': {}
        }

        validation_tests = {
            'structure': self.validate_board_structure,
            'occupancy_index': self.validate_occupancy_index,
            'piece_fields': self.validate_piece_fields
        }

        for test_name, test_func in validation_tests.items():
            is_valid, errors = test_func(board)
            report['validations'][test_name] = {
                'valid': is_valid,
                'errors': errors,
                'error_count': len(errors)
            }

            if not is_valid:
                report['overall_valid'] = False
                report['total_errors'] += len(errors)

        return report
