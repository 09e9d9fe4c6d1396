"""
象棋引擎 CLI

- show: 显示棋盘
- moves: 获取合法走法
- best: 获取 AI 推荐走法
- battle: AI 对战并统计胜率

## 使用示例

```bash
xqengine best --depth 3 --seed 1
xqengine moves --fen "4k4/9/9/9/9/9/9/9/9/3K5" --turn red --json
xqengine battle --red minimax --black random --games 10 --depth 2
```
"""

from __future__ import annotations

import json
import random
from pathlib import Path

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from xqengine.ai import AIConfig, AIEngine, MinimaxAI
from xqengine.board import Board
from xqengine.game import Game, GameConfig
from xqengine.logging import configure_logging
from xqengine.rules import all_legal_moves, is_in_check
from xqengine.types import GameResult, Side

console = Console()
app = typer.Typer(help="Xiangqi engine - rules, legal moves and minimax search")


def _load(fen: str | None, turn: str) -> tuple[Board, Side]:
    try:
        board = Board.from_fen(fen) if fen else Board.initial()
        return board, Side.parse(turn)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="stderr 日志级别"),
    log_file: Path | None = typer.Option(None, "--log-file", help="额外写入的日志文件"),
) -> None:
    """Xiangqi engine CLI"""
    try:
        configure_logging(log_level, log_file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


@app.command()
def show(
    fen: str | None = typer.Option(None, "--fen", "-f", help="FEN 字符串，默认开局"),
) -> None:
    """显示棋盘"""
    board, _ = _load(fen, "red")
    console.print(board.display())
    console.print(f"[dim]{board.to_fen()}[/dim]")


@app.command()
def moves(
    fen: str | None = typer.Option(None, "--fen", "-f", help="FEN 字符串，默认开局"),
    turn: str = typer.Option("red", "--turn", "-t", help="走棋方 (red/black)"),
    output_json: bool = typer.Option(False, "--json", help="JSON 输出"),
) -> None:
    """获取合法走法"""
    board, side = _load(fen, turn)
    legal_moves = [m.to_notation() for m in all_legal_moves(board, side)]
    in_check = is_in_check(board, side)

    if output_json:
        response = {"turn": side.value, "in_check": in_check, "moves": legal_moves, "total": len(legal_moves)}
        print(json.dumps(response, indent=2))
        return

    console.print(f"Legal moves for {side.value} ({len(legal_moves)}){' [red]CHECK[/red]' if in_check else ''}:")
    for mv in legal_moves:
        console.print(f"  {mv}")


@app.command()
def best(
    fen: str | None = typer.Option(None, "--fen", "-f", help="FEN 字符串，默认开局"),
    turn: str = typer.Option("red", "--turn", "-t", help="走棋方 (red/black)"),
    depth: int = typer.Option(3, "--depth", "-d", help="搜索深度"),
    seed: int | None = typer.Option(None, "--seed", "-s", help="随机种子"),
    output_json: bool = typer.Option(False, "--json", help="JSON 输出"),
) -> None:
    """选择最佳走法"""
    board, side = _load(fen, turn)
    ai = MinimaxAI(AIConfig(depth=depth, seed=seed))
    try:
        move = ai.select_move(board, side)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    notation = move.to_notation() if move else None
    if output_json:
        response = {"turn": side.value, "depth": depth, "move": notation, "nodes": ai.nodes_searched}
        print(json.dumps(response, indent=2))
    elif move is None:
        console.print(f"[yellow]{side.value} has no legal moves[/yellow]")
    else:
        console.print(f"Best move for {side.value} (depth={depth}): [bold]{notation}[/bold]")
        console.print(f"[dim]nodes searched: {ai.nodes_searched}[/dim]")


def run_single_game(
    ai_red: str,
    ai_black: str,
    depth: int,
    max_moves: int,
    seed: int | None = None,
) -> tuple[GameResult, int]:
    """运行单场对战

    Returns:
        (结果, 步数)
    """
    game = Game(config=GameConfig(max_moves=max_moves))
    red_ai = AIEngine.get_strategy(ai_red, AIConfig(depth=depth, seed=seed))
    black_ai = AIEngine.get_strategy(
        ai_black, AIConfig(depth=depth, seed=seed + 1 if seed is not None else None)
    )

    while not game.is_over:
        current_ai = red_ai if game.current_turn == Side.RED else black_ai
        game.play_ai_move(current_ai)

    return game.result, len(game.move_history)


@app.command()
def battle(
    ai_red: str = typer.Option("minimax", "--red", "-r", help="Red AI strategy"),
    ai_black: str = typer.Option("random", "--black", "-b", help="Black AI strategy"),
    num_games: int = typer.Option(10, "--games", "-n", help="Number of games"),
    max_moves: int = typer.Option(200, "--max-moves", "-m", help="Max moves per game (draw if exceeded)"),
    depth: int = typer.Option(2, "--depth", "-d", help="Search depth for minimax"),
    seed: int | None = typer.Option(None, "--seed", "-s", help="Random seed for reproducibility"),
) -> None:
    """Run AI vs AI battle"""
    available = AIEngine.list_strategies()
    for name in (ai_red, ai_black):
        if name not in available:
            console.print(f"[red]Unknown AI: {name}. Available: {available}[/red]")
            raise typer.Exit(1)

    console.print("\n[bold]Xiangqi AI Battle[/bold]")
    console.print(f"Red: [red]{ai_red}[/red] vs Black: [blue]{ai_black}[/blue]")
    console.print(f"Games: {num_games}, Max moves: {max_moves}, Depth: {depth}\n")

    seeds = random.Random(seed)
    counts = {GameResult.RED_WIN: 0, GameResult.BLACK_WIN: 0, GameResult.DRAW: 0}
    total_moves = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"[cyan]{ai_red} vs {ai_black}...", total=num_games)
        for _ in range(num_games):
            game_seed = seeds.randrange(2**31) if seed is not None else None
            try:
                result, moves_played = run_single_game(ai_red, ai_black, depth, max_moves, game_seed)
            except ValueError as e:
                progress.stop()
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(1) from None
            counts[result] += 1
            total_moves += moves_played
            progress.update(task, advance=1)

    table = Table(title="Battle Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Red Wins", f"[red]{counts[GameResult.RED_WIN]}[/red]")
    table.add_row("Black Wins", f"[blue]{counts[GameResult.BLACK_WIN]}[/blue]")
    table.add_row("Draws", str(counts[GameResult.DRAW]))
    table.add_row("Avg Moves", f"{total_moves / max(num_games, 1):.1f}")
    console.print(table)


if __name__ == "__main__":
    app()
