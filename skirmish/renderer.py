"""
Board Renderer - ASCII visualization of a skirmish position.

Renders the board as text for debugging and the command line.
"""

from typing import Optional

from skirmish.board import Board
from skirmish.units import Faction


FACTION_SYMBOLS = {
    Faction.GOOD: 'G',
    Faction.BAD: 'b',
}
OBSTACLE_SYMBOL = '#'
SHARED_SYMBOL = '*'


class BoardRenderer:
    """ASCII renderer for boards."""

    @staticmethod
    def render(board: Board, to_move: Optional[Faction] = None,
               show_info: bool = True) -> str:
        """Render the board as an ASCII string."""
        h, w = board.height, board.width
        lines = []

        if show_info:
            good = board.alive_units(Faction.GOOD)
            bad = board.alive_units(Faction.BAD)
            header = f"GOOD units: {len(good)}  BAD units: {len(bad)}"
            if to_move is not None:
                header += f"  To move: {to_move.name}"
            lines.append(header)
            lines.append("")

        cells = {}
        for unit in board.units.values():
            if not unit.is_alive:
                continue
            pos = unit.position
            cells[pos] = SHARED_SYMBOL if pos in cells else FACTION_SYMBOLS[unit.faction]

        lines.append("  " + "".join(f"{x % 10}" for x in range(w)))
        lines.append("  " + "-" * w)
        for y in range(h):
            row = f"{y % 10}|"
            for x in range(w):
                if (x, y) in cells:
                    row += cells[(x, y)]
                elif board.is_obstacle(x, y):
                    row += OBSTACLE_SYMBOL
                else:
                    row += "."
            row += f"|{y % 10}"
            lines.append(row)
        lines.append("  " + "-" * w)
        lines.append("  " + "".join(f"{x % 10}" for x in range(w)))

        if show_info:
            lines.append("")
            lines.append("Legend: G=GOOD b=BAD #=Obstacle *=Shared cell")

        return "\n".join(lines)

    @staticmethod
    def render_compact(board: Board, turn: int = 0) -> str:
        """Compact single-line rendering for logging."""
        good = board.alive_units(Faction.GOOD)
        bad = board.alive_units(Faction.BAD)
        return (f"T{turn:04d} "
                f"GOOD[u={len(good)} hp={sum(u.hp for u in good)}] "
                f"BAD[u={len(bad)} hp={sum(u.hp for u in bad)}]")

    @staticmethod
    def render_unit_details(board: Board, faction: Faction) -> str:
        """Render detailed unit info for a faction."""
        lines = [f"{faction.name} units:"]
        for unit in board.alive_units(faction):
            lines.append(
                f"  #{unit.unit_id} ({unit.x},{unit.y}) "
                f"HP={unit.hp}/{unit.max_hp} "
                f"DMG={unit.damage} RNG={unit.attack_range}"
            )
        return "\n".join(lines)
