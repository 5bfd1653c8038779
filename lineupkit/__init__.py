"""
lineupkit - Channel Programming Lineup Engine

Data model and transforms for a channel's ordered, time-slotted programming:
- Condensed lineups joined against a program lookup table on demand
- Offset and index bookkeeping kept consistent across every edit
- Sorting, random and cyclic shuffles, block shuffle with perfect sync
- Start-time padding, duplicate removal, criteria-based removal
"""

__version__ = "1.0.0"
__license__ = "MIT"

from lineupkit.config import get_config, load_config

__all__ = [
    "__version__",
    "get_config",
    "load_config",
]
