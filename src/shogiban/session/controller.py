"""Session controller: the single owner of the game position and move intent.

Front-ends feed raw events in (square clicks, hand clicks, promotion
choices, undo, restart, navigation) and read a ``ViewModel`` back out. Every
event is handled synchronously and ends with the position re-encoded into
the location's fragment via a history *replace*, so moves never add
back/forward entries.
"""

from typing import NoReturn

from shogiban.core.configs.schema import SessionConfig
from shogiban.core.errors import IllegalMoveError, PreconditionViolation
from shogiban.core.shogi.engine import ShogiPosition
from shogiban.core.utils.logging import new_session_id, session_logger
from shogiban.core.utils.squares import NUM_SQUARES, square_name
from shogiban.session import intent as intents
from shogiban.session import link, oracle
from shogiban.session.effects import NullEffects, RenderTask, SessionEffects
from shogiban.session.intent import NO_INTENT, MoveIntent, WithDestination
from shogiban.session.link import Location
from shogiban.session.origin import resolve_move
from shogiban.session.view import ViewModel, build_view


class SessionController:
    """Interactive shogi session bound to one location and one effects sink.

    Construct one per interactive session and pass it to whatever front-end
    drives it; nothing about the session is stored at module level.
    Its log records carry ``session_id`` so concurrent games can be told
    apart.
    """

    def __init__(
        self,
        location: Location,
        effects: SessionEffects | None = None,
        config: SessionConfig | None = None,
    ) -> None:
        """Start a session, restoring it from the location's fragment if possible.

        Args:
            location: Navigation state holding the shareable fragment.
            effects: Sink for sound/scroll/clipboard feedback.
            config: Session options (starting position, sound).
        """
        self.config = config or SessionConfig()
        self.session_id = new_session_id()
        self._log = session_logger(self.session_id)
        self._location = location
        self._effects = effects or NullEffects()
        self._intent: MoveIntent = NO_INTENT
        self._render_task: RenderTask | None = None

        self._position, restored = link.load_initial(location, self.config.starting_sfen)
        if restored:
            self._log.info(f"Restored game from link ({len(self._position.move_history)} moves)")
        self._play_move_sound()

        location.add_listener(self.external_state_change_requested)
        self._sync_location()

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def intent(self) -> MoveIntent:
        return self._intent

    @property
    def position(self) -> ShogiPosition:
        """The live position. Callers must treat it as read-only."""
        return self._position

    @property
    def link_to_share(self) -> str:
        return self._location.href

    def view(self) -> ViewModel:
        return build_view(self._intent, self._position)

    # -------------------------------------------------------------------------
    # Inbound events
    # -------------------------------------------------------------------------

    def square_clicked(self, square: int) -> None:
        """Advance, complete or cancel the move being built.

        Args:
            square: Index of the clicked square (0-80). Anything else cancels.
        """
        if 0 <= square < NUM_SQUARES:
            next_intent = intents.after_square_click(self._intent, square, self._position)
        else:
            next_intent = NO_INTENT

        self._log.debug(f"Square click {square}: {self._intent} -> {next_intent}")
        self._intent = next_intent

        if isinstance(next_intent, WithDestination):
            self._resolve_forced_promotion(next_intent)
        self._sync_location()

    def hand_piece_clicked(self, piece_type: int, color: int) -> None:
        """Start a drop, or cancel whatever move is in progress."""
        next_intent = intents.after_hand_click(self._intent, piece_type, color, self._position)
        self._log.debug(f"Hand click {piece_type}/{color}: {self._intent} -> {next_intent}")
        self._intent = next_intent
        self._sync_location()

    def promotion_chosen(self, promote: bool) -> None:
        """Complete the pending move with the player's promotion choice.

        Raises:
            PreconditionViolation: If no move is waiting for a promotion choice.
        """
        if not isinstance(self._intent, WithDestination):
            self._fault(f"Promotion chosen without a pending destination ({self._intent})")
        self._complete_move(self._intent, promote)
        self._sync_location()

    def undo_requested(self) -> None:
        """Take back the last move.

        Raises:
            PreconditionViolation: If the move history is empty.
        """
        if not self._position.move_history:
            self._fault("Undo requested with an empty move history")

        record = self._position.unmake_move()
        self._log.info(f"Undid {record.usi()}")
        self._intent = NO_INTENT
        self._play_move_sound()
        self._sync_location()

    def restart_requested(self) -> None:
        """Throw the current game away and start a new one."""
        self._position = ShogiPosition(self.config.starting_sfen)
        self._intent = NO_INTENT
        self._log.info("Restarted game")
        self._play_move_sound()
        self._sync_location()

    def external_state_change_requested(self) -> None:
        """Reload from the location after an outside navigation.

        Bad fragments are ignored and the current game is written back over
        them.
        """
        restored = link.try_decode(self._location.hash)
        if restored is not None:
            self._position = restored
            self._intent = NO_INTENT
            self._log.info(f"Reloaded game from link ({len(restored.move_history)} moves)")
            self._play_move_sound()
        self._sync_location()

    def after_render(self) -> None:
        """Let the session run work that had to wait for the next render."""
        if self._render_task is not None:
            task, self._render_task = self._render_task, None
            task.fire()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _resolve_forced_promotion(self, intent: WithDestination) -> None:
        """Complete the move at once unless both promotion choices are legal."""
        cant = oracle.cant_promote(intent.origin, intent.destination, self._position)
        must = oracle.must_promote(intent.origin, intent.destination, self._position)
        if cant and must:
            self._fault(f"Move to {square_name(intent.destination)} can neither promote nor stay")

        if cant:
            self._complete_move(intent, promote=False)
        elif must:
            self._complete_move(intent, promote=True)

    def _complete_move(self, intent: WithDestination, promote: bool) -> None:
        move = resolve_move(intent.origin, intent.destination, promote)
        try:
            self._position.make_move(move)
        except IllegalMoveError as e:
            self._fault(f"Completed move was rejected by the engine: {e}")

        self._log.info(f"Played {move.usi()}")
        self._intent = NO_INTENT
        self._play_move_sound()
        self._schedule_render_task()

    def _schedule_render_task(self) -> None:
        if self._render_task is not None:
            self._render_task.cancel()
        self._render_task = RenderTask(self._effects.scroll_history_into_view)

    def _play_move_sound(self) -> None:
        if self.config.sound_enabled:
            self._effects.play_move_sound()

    def _sync_location(self) -> None:
        self._location.replace(link.encode(self._position))

    def _fault(self, msg: str) -> NoReturn:
        self._log.error(msg)
        raise PreconditionViolation(msg)
