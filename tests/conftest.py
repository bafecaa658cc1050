"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from fractions import Fraction
from pathlib import Path

import pytest

from quote_oracle.config import (
    AppConfig,
    ChainConfig,
    EngineConfig,
    FeedConfig,
    MetadataConfig,
)
from quote_oracle.factory import build_oracle
from quote_oracle.oracle import CrossOracle

WAD = 10**18


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_engine_config() -> EngineConfig:
    return EngineConfig(
        name="TestOracle",
        max_legs=3,
        midpoint="geometric",
        anchors=("USD", "USDC"),
    )


@pytest.fixture()
def sample_feeds() -> tuple[FeedConfig, ...]:
    return (
        FeedConfig(base="EUR", quote="USD", bid=Fraction("1.0995"), ask=Fraction("1.1005")),
        FeedConfig(base="USD", quote="JPY", bid=Fraction("149.90"), ask=Fraction("150.10")),
        FeedConfig(base="USDC", quote="USD", bid=Fraction("0.9995"), ask=Fraction("1.0005")),
        FeedConfig(base="DAI", quote="USDC", bid=Fraction("0.9995"), ask=Fraction("1.0005")),
        FeedConfig(base="WETH", quote="USDC", price=Fraction(3500), spread_bps=10),
    )


@pytest.fixture()
def sample_metadata_config() -> MetadataConfig:
    return MetadataConfig(
        provider="static",
        token_decimals={"DAI": 18, "USDC": 6, "WETH": 18, "LONELY": 8},
    )


@pytest.fixture()
def sample_app_config(
    sample_engine_config: EngineConfig,
    sample_feeds: tuple[FeedConfig, ...],
    sample_metadata_config: MetadataConfig,
) -> AppConfig:
    return AppConfig(
        oracle=sample_engine_config,
        feeds=sample_feeds,
        metadata=sample_metadata_config,
        chains={
            "sui": ChainConfig(rpc_endpoints=("https://rpc.example.com",), rpc_timeout=5)
        },
    )


@pytest.fixture()
def oracle(sample_app_config: AppConfig) -> CrossOracle:
    return build_oracle(sample_app_config)


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    oracle:
      name: YamlOracle
      max_legs: 3
      midpoint: arithmetic
      anchors: [USD, USDC]
    feeds:
      - base: EUR
        quote: USD
        bid: "1.0995"
        ask: "1.1005"
      - base: USDC
        quote: USD
        price: "1.0"
        spread_bps: 5
    metadata:
      provider: static
      token_decimals: {USDC: 6, DAI: 18}
    chains:
      sui:
        rpc_endpoints: ["https://rpc.example.com"]
        rpc_timeout: 10
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
