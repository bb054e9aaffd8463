"""shogiban: an interactive shogi board with shareable links.

Shared utilities are in `shogiban.core`:
- `from shogiban.core import setup_logging, load_config`
- `from shogiban.core.shogi import ShogiPosition`

The interactive session lives in `shogiban.session`:
- `from shogiban.session import SessionController`
"""

__version__ = "0.1.0"

# Re-export common entry points for convenience
from shogiban.core import load_config, save_config, setup_logging
from shogiban.core.shogi import ShogiPosition
from shogiban.session import SessionController

__all__ = [
    "SessionController",
    "ShogiPosition",
    "__version__",
    "load_config",
    "save_config",
    "setup_logging",
]
