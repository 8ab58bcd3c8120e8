"""
布局字符串解析

格式: "sizeX,sizeY,sizeZ,sizeW 布局"
布局中 | 分隔w层，/ 分隔z层，, 分隔行(第一行为 y=0)。
行内每个数字字符N表示N个空格，字母为棋子类型(大写: 队伍0, 小写: 队伍1)。
缺失的行和层补空，超出尺寸的字符忽略。
"""

from typing import List, Tuple

from .vec import Vec
from .piece import Piece
from ..utils.exceptions import LayoutParseError

DEFAULT_LAYOUT = "8,8,1,1 RNBQKBNR,PPPPPPPP,8,8,8,8,pppppppp,rnbqkbnr"


def parse_size(text: str) -> Vec:
    """
    解析尺寸部分

    Raises:
        LayoutParseError: 尺寸不是4个非负整数
    """
    parts = text.split(",")
    if len(parts) != 4:
        raise LayoutParseError(text, "尺寸应包含4个分量")
    try:
        values = [int(part) for part in parts]
    except ValueError:
        raise LayoutParseError(text, "尺寸分量必须是整数")
    if any(value < 0 for value in values):
        raise LayoutParseError(text, "尺寸分量不能为负")
    return Vec(*values)


def parse_row(text: str, width: int) -> List[Piece]:
    """
    解析一行

    Returns:
        List: 长度为width，元素为Piece或None
    """
    row = []
    for char in text:
        if len(row) >= width:
            break
        if char.isdecimal():
            row.extend([None] * min(int(char), width - len(row)))
        else:
            row.append(Piece.create(char, 0 if char == char.upper() else 1))
    row.extend([None] * (width - len(row)))
    return row


def parse_layout(layout: str) -> Tuple[Vec, List[Tuple[Vec, Piece]]]:
    """
    解析布局字符串

    Args:
        layout: 布局字符串

    Returns:
        Tuple[Vec, List[Tuple[Vec, Piece]]]: (棋盘尺寸, 按 w->z->y->x 顺序的棋子列表)
    """
    fields = layout.split()
    if not fields:
        raise LayoutParseError(layout, "布局为空")

    size = parse_size(fields[0])
    w_layers = fields[1].split("|") if len(fields) > 1 else []

    placements = []
    for w in range(size.w):
        z_layers = w_layers[w].split("/") if w < len(w_layers) else []
        for z in range(size.z):
            rows = z_layers[z].split(",") if z < len(z_layers) else []
            for y in range(size.y):
                row = parse_row(rows[y] if y < len(rows) else "", size.x)
                for x, piece in enumerate(row):
                    if piece is not None:
                        placements.append((Vec(x, y, z, w), piece))

    return size, placements


def to_layout(board) -> str:
    """
    将棋盘转换回布局字符串

    Args:
        board: GameBoard

    Returns:
        str: 布局字符串
    """
    size = board.size
    w_parts = []
    for w in range(size.w):
        z_parts = []
        for z in range(size.z):
            rows = []
            for y in range(size.y):
                text = ""
                empty = 0
                for x in range(size.x):
                    piece = board.get_piece(Vec(x, y, z, w))
                    if piece is None:
                        empty += 1
                        continue
                    # 数字按单字符解析，长空段拆成多个9
                    while empty > 0:
                        text += str(min(empty, 9))
                        empty -= min(empty, 9)
                    text += piece.symbol()
                while empty > 0:
                    text += str(min(empty, 9))
                    empty -= min(empty, 9)
                rows.append(text)
            z_parts.append(",".join(rows))
        w_parts.append("/".join(z_parts))
    return f"{size.serialize()} {'|'.join(w_parts)}"
