"""Wave Function Collapse algorithm for terrain generation."""

from .tile import Tile
from .grid import TileGrid
from .rules import (
    RuleProvider,
    HardcodedRuleProvider,
    PermissiveRuleProvider,
    RULE_PROVIDERS,
    NEUTRAL_WEIGHT,
    get_rule_provider,
)
from .wave import Wave, WaveState

__all__ = [
    "Tile",
    "TileGrid",
    "RuleProvider",
    "HardcodedRuleProvider",
    "PermissiveRuleProvider",
    "RULE_PROVIDERS",
    "NEUTRAL_WEIGHT",
    "get_rule_provider",
    "Wave",
    "WaveState",
]
