"""Hosts that drive a session: navigation state and the terminal front-end."""

from shogiban.host.location import FragmentLocation
from shogiban.host.terminal import TerminalEffects, TerminalSession, render_view

__all__ = ["FragmentLocation", "TerminalEffects", "TerminalSession", "render_view"]
