"""Generation settings for wavemap.

Settings come from three places, in increasing priority:
built-in defaults, WAVEMAP_* environment variables (a .env file is loaded
first), and explicit overrides such as CLI flags.
"""

from __future__ import annotations

import os
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from wavemap.core.distribution import TileDistribution
from wavemap.generation.wfc.rules import RuleProvider, get_rule_provider

ENV_PREFIX = "WAVEMAP_"

RuleName = Literal["hardcoded", "permissive"]
DistributionName = Literal["default", "uniform"]
GeneratorName = Literal["wfc", "perlin", "simplex"]


class GenerationSettings(BaseModel):
    """Everything needed to reproduce one generated map."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=16, gt=0)
    height: int = Field(default=16, gt=0)
    seed: int = 12345
    rules: RuleName = "hardcoded"
    distribution: DistributionName = "default"
    generator: GeneratorName = "wfc"

    def build_distribution(self) -> TileDistribution:
        if self.distribution == "uniform":
            return TileDistribution.uniform()
        return TileDistribution.default()

    def build_rule_provider(self) -> RuleProvider:
        return get_rule_provider(self.rules)


_FIELDS = ("width", "height", "seed", "rules", "distribution", "generator")


def load_settings(**overrides) -> GenerationSettings:
    """
    Build settings from the environment plus explicit overrides.

    Overrides that are None are ignored, so CLI arguments can be passed
    straight through.

    Raises:
        pydantic.ValidationError: If a value is out of range or unknown
    """
    load_dotenv(find_dotenv(usecwd=True))

    values: dict[str, object] = {}
    for name in _FIELDS:
        env_value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if env_value:
            values[name] = env_value

    for name, value in overrides.items():
        if name not in _FIELDS:
            raise TypeError(f"Unknown setting: {name}")
        if value is not None:
            values[name] = value

    return GenerationSettings(**values)
