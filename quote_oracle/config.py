"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from fractions import Fraction
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .engine.assets import MAX_DECIMALS, parse_asset
from .engine.legs import DEFAULT_MAX_LEGS, MAX_LEGS_LIMIT
from .models import BPS_DENOMINATOR

logger = logging.getLogger(__name__)

MIDPOINT_STRATEGIES = ("geometric", "arithmetic")
METADATA_PROVIDERS = ("static", "sui")
FEED_PROVIDERS = ("static",)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    name: str = "CrossOracle"
    max_legs: int = DEFAULT_MAX_LEGS
    midpoint: str = "geometric"
    max_amount_bits: int = 256
    anchors: tuple[str, ...] = ("USD",)

    @property
    def max_amount(self) -> int:
        return 2**self.max_amount_bits - 1


@dataclass(frozen=True)
class FeedConfig:
    base: str = ""
    quote: str = ""
    provider: str = "static"
    bid: Fraction | None = None
    ask: Fraction | None = None
    price: Fraction | None = None
    spread_bps: int = 0

    @property
    def spread_policy(self) -> str:
        if self.price is not None:
            return f"single price +/- {self.spread_bps} bps"
        return "two-sided bid/ask"


@dataclass(frozen=True)
class ChainConfig:
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30


@dataclass(frozen=True)
class MetadataConfig:
    provider: str = "static"
    chain: str = "sui"
    token_decimals: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AppConfig:
    oracle: EngineConfig = field(default_factory=EngineConfig)
    feeds: tuple[FeedConfig, ...] = ()
    metadata: MetadataConfig = field(default_factory=MetadataConfig)
    chains: dict[str, ChainConfig] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _to_fraction(value: Any) -> Fraction | None:
    """Parse a YAML price into an exact fraction. Prefer quoted strings."""
    if value is None:
        return None
    if isinstance(value, float):
        # repr gives the shortest decimal that round-trips, e.g. 1.0995
        value = repr(value)
    return Fraction(str(value).strip())


def _build_engine(raw: dict[str, Any]) -> EngineConfig:
    return EngineConfig(
        name=str(raw.get("name", "CrossOracle")),
        max_legs=int(raw.get("max_legs", DEFAULT_MAX_LEGS)),
        midpoint=str(raw.get("midpoint", "geometric")).lower(),
        max_amount_bits=int(raw.get("max_amount_bits", 256)),
        anchors=tuple(str(a) for a in raw.get("anchors", ["USD"])),
    )


def _build_feeds(raw: list[dict[str, Any]]) -> tuple[FeedConfig, ...]:
    feeds: list[FeedConfig] = []
    for f in raw:
        feeds.append(
            FeedConfig(
                base=str(f.get("base", "")),
                quote=str(f.get("quote", "")),
                provider=str(f.get("provider", "static")),
                bid=_to_fraction(f.get("bid")),
                ask=_to_fraction(f.get("ask")),
                price=_to_fraction(f.get("price")),
                spread_bps=int(f.get("spread_bps", 0)),
            )
        )
    return tuple(feeds)


def _build_metadata(raw: dict[str, Any]) -> MetadataConfig:
    return MetadataConfig(
        provider=str(raw.get("provider", "static")),
        chain=str(raw.get("chain", "sui")),
        token_decimals={
            str(k): int(v) for k, v in (raw.get("token_decimals") or {}).items()
        },
    )


def _build_chains(raw: dict[str, Any]) -> dict[str, ChainConfig]:
    chains: dict[str, ChainConfig] = {}
    for name, cfg in raw.items():
        chains[name] = ChainConfig(
            rpc_endpoints=tuple(cfg.get("rpc_endpoints", [])),
            rpc_timeout=int(cfg.get("rpc_timeout", 30)),
        )
    return chains


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_config(raw: dict[str, Any]) -> AppConfig:
    """Build and validate an AppConfig from an already-parsed mapping."""
    raw = _interpolate_env(raw or {})
    cfg = AppConfig(
        oracle=_build_engine(raw.get("oracle") or {}),
        feeds=_build_feeds(raw.get("feeds") or []),
        metadata=_build_metadata(raw.get("metadata") or {}),
        chains=_build_chains(raw.get("chains") or {}),
    )
    _validate(cfg)
    return cfg


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate oracle configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f)

    cfg = build_config(raw)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate_feed(feed: FeedConfig) -> None:
    label = f"{feed.base}/{feed.quote}"
    if not feed.base or not feed.quote:
        raise ValueError(f"Feed '{label}' must name both base and quote")
    if feed.base == feed.quote:
        raise ValueError(f"Feed '{label}' prices an asset against itself")
    if feed.provider not in FEED_PROVIDERS:
        raise ValueError(f"Feed '{label}' uses unknown provider '{feed.provider}'")

    if feed.price is not None:
        if feed.bid is not None or feed.ask is not None:
            raise ValueError(f"Feed '{label}' sets both price and bid/ask")
        if feed.price <= 0:
            raise ValueError(f"Feed '{label}' has non-positive price")
        if not 0 <= feed.spread_bps < BPS_DENOMINATOR:
            raise ValueError(f"Feed '{label}' has spread_bps out of range")
        return

    if feed.bid is None or feed.ask is None:
        raise ValueError(f"Feed '{label}' needs either price or bid and ask")
    if feed.bid <= 0:
        raise ValueError(f"Feed '{label}' has non-positive bid")
    if feed.bid > feed.ask:
        raise ValueError(f"Feed '{label}' has bid above ask")


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    engine = cfg.oracle
    if not 1 <= engine.max_legs <= MAX_LEGS_LIMIT:
        raise ValueError(f"max_legs must be between 1 and {MAX_LEGS_LIMIT}")
    if engine.midpoint not in MIDPOINT_STRATEGIES:
        raise ValueError(f"Unknown midpoint strategy '{engine.midpoint}'")
    if engine.max_amount_bits <= 0:
        raise ValueError("max_amount_bits must be positive")

    seen: set[tuple[Any, Any]] = set()
    for feed in cfg.feeds:
        _validate_feed(feed)
        pair = (parse_asset(feed.base), parse_asset(feed.quote))
        if pair[0] == pair[1]:
            raise ValueError(f"Feed '{feed.base}/{feed.quote}' prices an asset against itself")
        if pair in seen:
            raise ValueError(f"Duplicate feed for {feed.base}/{feed.quote}")
        seen.add(pair)

    for anchor in engine.anchors:
        parse_asset(anchor)

    meta = cfg.metadata
    if meta.provider not in METADATA_PROVIDERS:
        raise ValueError(f"Unknown metadata provider '{meta.provider}'")
    if meta.provider == "sui" and meta.chain not in cfg.chains:
        raise ValueError(
            f"Metadata provider 'sui' references unknown chain '{meta.chain}'"
        )
    for token, decimals in meta.token_decimals.items():
        if not 0 <= decimals <= MAX_DECIMALS:
            raise ValueError(f"Token '{token}' has decimals out of range")
