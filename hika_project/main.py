#!/usr/bin/env python3
"""
Hika 主入口文件

提供命令行接口，用于查看布局、列出走法和检查走法合法性。
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hika_project import __version__, __description__
from hika_project.src.hika_engine import HikaGame, ConfigManager, EngineConfig, HikaError, setup_logger
from hika_project.src.hika_engine.rules_engine import Vec, Move
from hika_project.src.hika_engine.rules_engine.vec import to_letters
from hika_project.src.hika_engine.rules_engine.piece import piece_symbol

console = Console()


def print_banner():
    """打印项目横幅"""
    banner_text = Text()
    banner_text.append("Hika\n", style="bold blue")
    banner_text.append(f"版本: {__version__}\n", style="green")
    banner_text.append(__description__, style="white")

    panel = Panel(
        banner_text,
        title="多维棋类走法引擎",
        title_align="center",
        border_style="blue",
        padding=(1, 2)
    )
    console.print(panel)


def load_game(ctx: click.Context, layout: Optional[str]) -> HikaGame:
    """按命令行上下文中的配置创建棋局"""
    return HikaGame(layout, config=ctx.obj['engine_config'])


@click.group()
@click.version_option(version=__version__, prog_name="Hika")
@click.option('--debug', is_flag=True, help='启用调试模式')
@click.option('--config-dir', type=click.Path(file_okay=False), default=None,
              help='配置目录，不指定则使用默认配置')
@click.pass_context
def cli(ctx: click.Context, debug: bool, config_dir: Optional[str]):
    """多维棋类走法引擎 - 声明式规则树、将军检测和走法缓存"""
    ctx.ensure_object(dict)

    if config_dir:
        manager = ConfigManager(config_dir)
        engine_config = manager.get_engine_config()
        logging_config = manager.get_logging_config()
        setup_logger(
            level='DEBUG' if debug else logging_config.level,
            log_file=logging_config.log_file,
            log_dir=logging_config.log_dir,
            max_size=logging_config.max_size,
            backup_count=logging_config.backup_count,
            console_output=logging_config.console_output
        )
        console.print(f"[green]使用配置目录: {config_dir}[/green]")
    else:
        engine_config = EngineConfig()
        setup_logger(level='DEBUG' if debug else 'WARNING')

    if debug:
        console.print("[yellow]调试模式已启用[/yellow]")

    ctx.obj['engine_config'] = engine_config


@cli.command()
@click.option('--layout', type=str, default=None, help='布局字符串')
@click.pass_context
def show(ctx: click.Context, layout: Optional[str]):
    """显示棋盘各层"""
    game = load_game(ctx, layout)
    size = game.get_size()

    for w in range(size.w):
        for z in range(size.z):
            table = Table(title=f"z={z} w={w}", show_header=True, header_style="bold")
            table.add_column("y", justify="right")
            for x in range(size.x):
                table.add_column(to_letters(x), justify="center")
            # y 大的行画在上面
            for y in reversed(range(size.y)):
                row = [piece_symbol(game.get_piece(Vec(x, y, z, w))) for x in range(size.x)]
                table.add_row(str(y + 1), *row)
            console.print(table)

    is_valid, errors = game.validate()
    if not is_valid:
        for error in errors:
            console.print(f"[red]{error}[/red]")


@cli.command()
@click.option('--layout', type=str, default=None, help='布局字符串')
@click.option('--team', type=int, default=0, help='队伍 (0 或 1)')
@click.option('--square', type=str, default=None, help='只列出该格的走法，格式 x,y,z,w')
@click.option('--no-king-check', is_flag=True, help='不进行将军检测')
@click.pass_context
def moves(ctx: click.Context, layout: Optional[str], team: int,
          square: Optional[str], no_king_check: bool):
    """列出走法"""
    game = load_game(ctx, layout)
    king_check = not no_king_check

    if square:
        move_list = game.get_moves(Vec.deserialize(square), king_check)
    else:
        move_list = game.get_moves_for_team(team, king_check)

    table = Table(title=f"走法 ({len(move_list)})")
    table.add_column("记法")
    table.add_column("起点")
    table.add_column("终点")
    for move in move_list:
        table.add_row(move.to_notation(), move.src.serialize(), move.dst.serialize())
    console.print(table)


@cli.command()
@click.argument('move_text')
@click.option('--layout', type=str, default=None, help='布局字符串')
@click.pass_context
def check(ctx: click.Context, move_text: str, layout: Optional[str]):
    """检查走法是否合法，走法格式 x,y,z,w/x,y,z,w"""
    game = load_game(ctx, layout)
    move = Move.deserialize(move_text)

    if game.is_valid_move(move):
        console.print(f"[green]合法走法: {move.to_notation()}[/green]")
    else:
        console.print(f"[red]非法走法: {move.to_notation()}[/red]")
        sys.exit(2)


@cli.command()
def info():
    """显示系统信息"""
    print_banner()


def main():
    """主入口函数"""
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]程序被用户中断[/yellow]")
        sys.exit(0)
    except (HikaError, ValueError) as e:
        console.print(f"[red]发生错误: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
