"""Debug runner: one automatic battle between two packaged species."""
from __future__ import annotations
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.markup import escape

from tilemon.battle.engine import BattleEngine
from tilemon.battle.factory import create_combatant
from tilemon.battle.models import Combatant
from tilemon.battle.rng import seeded
from tilemon.battle.session import BattleSession, PLAYER_WIN
from tilemon.core.errors import TilemonError
from tilemon.core.logging import logger
from tilemon.core.types import format_types, status_label
from tilemon.data.loader import get_species
from tilemon.system.settings import Settings

console = Console()

DEFAULT_PLAYER = "charmander"
DEFAULT_ENEMY = "bulbasaur"
DEFAULT_LEVEL = 10


def _hp_bar(current: int, max_hp: int, length: int = 20) -> str:
    if max_hp <= 0 or current <= 0:
        return "[red]FAINTED[/red]"
    percent = current / max_hp
    filled = max(1, int(percent * length))
    color = "green" if percent > 0.5 else "yellow" if percent > 0.2 else "red"
    return f"[{color}]{'█' * filled}[/{color}]{'░' * (length - filled)}"


def _summary(c: Combatant, title: str) -> Panel:
    info = f"{c.name} Lv{c.level}"
    if status_label(c.status):
        info += f" {status_label(c.status)}"
    body = (f"[bold bright_white]{info}[/bold bright_white]\n"
            f"{escape('[' + format_types(c.types) + ']')}\n"
            f"HP: {c.current_hp}/{c.max_hp}\n{_hp_bar(c.current_hp, c.max_hp)}")
    return Panel(body, title=f"[bold]{title}[/bold]", box=box.ROUNDED, width=40, padding=(0, 1))


def _parse_args(argv: List[str]):
    player = argv[0] if len(argv) > 0 else DEFAULT_PLAYER
    enemy = argv[1] if len(argv) > 1 else DEFAULT_ENEMY
    level = int(argv[2]) if len(argv) > 2 else DEFAULT_LEVEL
    seed: Optional[int] = int(argv[3]) if len(argv) > 3 else None
    return player, enemy, level, seed


def run(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    settings = Settings.load()
    settings.apply_logging()
    try:
        player_key, enemy_key, level, seed = _parse_args(args)
    except ValueError:
        console.print("[red]usage: main.py [species_a] [species_b] [level] [seed][/red]")
        return 2
    if seed is None:
        engine = BattleEngine.from_settings(settings)
    else:
        engine = BattleEngine(seeded(seed))
    try:
        player = create_combatant(get_species(player_key), level)
        enemy = create_combatant(get_species(enemy_key), level)
    except TilemonError as e:
        logger.error("SetupFailed", error=str(e))
        console.print(f"[red]{e}[/red]")
        return 1

    session = BattleSession(player, enemy, engine)
    table = Table(title=f"{player.name} vs {enemy.name}", box=box.ROUNDED, show_lines=True)
    table.add_column("Turn", justify="right", style="cyan")
    table.add_column("Events", style="bright_white")
    entry = session.start()
    if entry:
        table.add_row("0", "\n".join(entry))

    def _record(turn: int, messages: List[str]):
        table.add_row(str(turn), "\n".join(messages))

    result = session.run_auto(on_turn=_record)
    if result == PLAYER_WIN:
        before = len(session.log)
        session.award_experience()
        table.add_row("-", "\n".join(session.log[before:]))
    console.print(table)
    console.print(_summary(player, "PLAYER"))
    console.print(_summary(enemy, "OPPONENT"))
    console.print(Panel(f"[bold]{result}[/bold] after {session.turn_counter} turns", box=box.DOUBLE))
    return 0


__all__ = ["run"]
