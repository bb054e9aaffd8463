"""Terminal front-end for a shogiban session, drawn with rich.

Commands are typed one per line::

    7g / click 7g      click a square
    hand P [b|w]       click a hand piece (defaults to the side to move)
    promote y|n        answer the promotion prompt
    undo, restart      take back a move / start over
    goto <fragment>    navigate to a shared link's fragment
    back, forward      walk the navigation history
    link               print the shareable link
    quit
"""

import shogi
from loguru import logger
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shogiban.core.configs.schema import DisplayConfig
from shogiban.core.shogi.notation import (
    BOARD_SYMBOLS,
    HISTORY_PREAMBLE,
    KANJI_NUMERALS,
    PIECE_NAMES,
)
from shogiban.core.utils.squares import FILES, parse_square
from shogiban.host.location import FragmentLocation
from shogiban.session.controller import SessionController
from shogiban.session.intent import WithDestination
from shogiban.session.view import ViewModel

HAND_SYMBOLS = {
    "R": shogi.ROOK,
    "B": shogi.BISHOP,
    "G": shogi.GOLD,
    "S": shogi.SILVER,
    "N": shogi.KNIGHT,
    "L": shogi.LANCE,
    "P": shogi.PAWN,
}
COLOR_SYMBOLS = {"b": shogi.BLACK, "w": shogi.WHITE}
COLOR_NAMES = {shogi.BLACK: "☗ Black", shogi.WHITE: "☖ White"}


class TerminalEffects:
    """Effects sink that rings the terminal bell for moves."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def play_move_sound(self) -> None:
        self.console.bell()

    def scroll_history_into_view(self) -> None:
        # The history panel always shows the latest moves
        logger.debug("History already in view")

    def copy_link_feedback(self, success: bool) -> None:
        if success:
            self.console.print("[green]Link ready to copy[/green]")
        else:
            self.console.print("[red]Could not copy link[/red]")


def _piece_label(piece: shogi.Piece) -> str:
    name = BOARD_SYMBOLS[piece.piece_type]
    return f"v{name}" if piece.color == shogi.WHITE else f" {name}"


def _square_cell(view: ViewModel, square: int, show_candidates: bool) -> Text:
    piece = view.pieces.get(square)
    style = ""

    if square in (view.previous_move_origin, view.previous_move_destination):
        style = "on grey23"
    if show_candidates and square in view.origin_candidates:
        style = "bold"
    if square == view.move_origin:
        style = "reverse"
    if square == view.move_destination:
        style = "bold on yellow"

    if piece is not None:
        label = _piece_label(piece)
        if piece.piece_type == shogi.KING and view.in_check[piece.color]:
            style = "bold white on red"
    elif show_candidates and square in view.destination_candidates and view.ghost_piece:
        label = _piece_label(view.ghost_piece)
        style = "dim on green"
    elif show_candidates and square in view.destination_candidates:
        label = " ・"
        style = "on green"
    else:
        label = " ・"

    return Text(label, style=style)


def render_board(view: ViewModel, display: DisplayConfig) -> Table:
    """Draw the 9x9 board with highlights for the move being built."""
    table = Table(show_header=True, show_lines=False, box=None, padding=(0, 0))
    files = FILES[::-1] if display.flip_board else FILES
    for file_char in files:
        table.add_column(f" {file_char}", justify="center")
    table.add_column("")

    ranks = range(8, -1, -1) if display.flip_board else range(9)
    for row in ranks:
        cells = []
        for file_char in files:
            square = row * 9 + FILES.index(file_char)
            cells.append(_square_cell(view, square, display.show_candidates))
        cells.append(Text(KANJI_NUMERALS[row]))
        table.add_row(*cells)
    return table


def render_hand(view: ViewModel, color: int) -> Text:
    text = Text(f"{COLOR_NAMES[color]}: ")
    if view.in_check[color]:
        text.append("(check) ", style="bold red")
    for hand_piece in view.hands[color]:
        if hand_piece.count == 0:
            continue
        symbol = next(key for key, value in HAND_SYMBOLS.items() if value == hand_piece.piece_type)
        style = "reverse" if view.hand_selection[color] == hand_piece.piece_type else ""
        text.append(f"{symbol}x{hand_piece.count} ", style=style)
    return text


def render_view(view: ViewModel, display: DisplayConfig) -> Panel:
    """Compose board, hands, prompt and history into one panel."""
    parts = [
        render_hand(view, shogi.WHITE),
        render_board(view, display),
        render_hand(view, shogi.BLACK),
    ]
    if view.promotion_prompt is not None:
        prompt = view.promotion_prompt
        parts.append(
            Text(
                f"Promote {PIECE_NAMES[prompt.piece.piece_type].strip('　')} to "
                f"{PIECE_NAMES[prompt.promoted.piece_type].strip('　')}? (promote y/n)",
                style="bold yellow",
            )
        )

    history = [HISTORY_PREAMBLE, *view.history[-10:]]
    parts.append(Text("\n".join(history), style="cyan"))
    return Panel(Group(*parts), title=f"{COLOR_NAMES[view.side_to_move]} to move")


class TerminalSession:
    """Read commands from the terminal and feed them to a session controller."""

    def __init__(
        self,
        controller: SessionController,
        location: FragmentLocation,
        effects: TerminalEffects,
        display: DisplayConfig | None = None,
    ) -> None:
        self.controller = controller
        self.location = location
        self.effects = effects
        self.console = effects.console
        self.display = display or DisplayConfig()

    def render(self) -> None:
        self.console.print(render_view(self.controller.view(), self.display))
        self.controller.after_render()

    def handle(self, line: str) -> bool:
        """Apply one command line.

        Returns:
            False when the session should end, True otherwise.
        """
        words = line.strip().split()
        if not words:
            return True

        command, args = words[0].lower(), words[1:]
        position = self.controller.position

        if command in ("quit", "exit", "q"):
            return False
        if command == "help":
            self.console.print(__doc__)
        elif command == "click" and len(args) == 1:
            self.controller.square_clicked(parse_square(args[0]))
        elif len(command) == 2 and not args:
            self.controller.square_clicked(parse_square(command))
        elif command in ("hand", "drop") and args:
            symbol = args[0].upper()
            if symbol not in HAND_SYMBOLS:
                msg = f"Unknown hand piece {args[0]!r}"
                raise ValueError(msg)
            color = COLOR_SYMBOLS.get(args[1].lower()) if len(args) > 1 else position.side_to_move
            if color is None:
                msg = f"Unknown color {args[1]!r}"
                raise ValueError(msg)
            self.controller.hand_piece_clicked(HAND_SYMBOLS[symbol], color)
        elif command == "promote" and len(args) == 1:
            if not isinstance(self.controller.intent, WithDestination):
                self.console.print("[yellow]No promotion pending[/yellow]")
                return True
            self.controller.promotion_chosen(args[0].lower() in ("y", "yes", "+"))
        elif command == "undo":
            if not position.move_history:
                self.console.print("[yellow]Nothing to undo[/yellow]")
                return True
            self.controller.undo_requested()
        elif command == "restart":
            self.controller.restart_requested()
        elif command == "goto" and len(args) == 1:
            self.location.navigate(args[0])
        elif command == "back":
            self.location.back()
        elif command == "forward":
            self.location.forward()
        elif command == "link":
            self.console.print(self.controller.link_to_share, soft_wrap=True)
            self.effects.copy_link_feedback(True)
        else:
            msg = f"Unknown command {line.strip()!r} (type 'help')"
            raise ValueError(msg)
        return True

    def run(self) -> None:
        """Interactive loop until 'quit' or end of input."""
        self.render()
        while True:
            try:
                line = self.console.input("[bold]> [/bold]")
            except EOFError:
                break
            try:
                keep_going = self.handle(line)
            except ValueError as e:
                self.console.print(f"[red]{e}[/red]")
                continue
            if not keep_going:
                break
            self.render()
