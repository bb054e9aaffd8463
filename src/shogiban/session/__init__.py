"""Interactive session layer: move intents, legality probes, links, view-model."""

from shogiban.session.controller import SessionController
from shogiban.session.effects import NullEffects, RenderTask, SessionEffects
from shogiban.session.intent import (
    NO_INTENT,
    MoveIntent,
    NoIntent,
    WithDestination,
    WithOrigin,
)
from shogiban.session.link import Location, decode, encode, load_initial, try_decode
from shogiban.session.origin import HandOrigin, Origin, SquareOrigin
from shogiban.session.view import HandPiece, PromotionPrompt, ViewModel, build_view

__all__ = [
    "NO_INTENT",
    "HandOrigin",
    "HandPiece",
    "Location",
    "MoveIntent",
    "NoIntent",
    "NullEffects",
    "Origin",
    "PromotionPrompt",
    "RenderTask",
    "SessionController",
    "SessionEffects",
    "SquareOrigin",
    "ViewModel",
    "WithDestination",
    "WithOrigin",
    "build_view",
    "decode",
    "encode",
    "load_initial",
    "try_decode",
]
