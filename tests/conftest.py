"""
Pytest configuration and fixtures for tracker tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from chains.registry import ChainRegistry  # noqa: E402
from core.models import BalanceSnapshot, Chain, Coin  # noqa: E402

ACCOUNT = "neutron1lzecpea0qxw5xae92xkm3vaddeszr278k7w20c"
TERRA_ACCOUNT = "terra1w7mtx2g478kkhs6pgynpcjpt6aw4930q34j36v"
BASE_DENOM = "factory/neutron1lzecpea0qxw5xae92xkm3vaddeszr278k7w20c/dAsset"


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


class StubBalanceSource:
    """In-memory BalanceSource; records every query."""

    def __init__(self, balances=None, fail_on=None, error=None):
        self.balances = balances or {}
        self.fail_on = fail_on
        self.error = error
        self.calls = []

    async def get_all_balances(self, chain_name, address):
        self.calls.append((chain_name, address))
        if chain_name == self.fail_on:
            raise self.error
        return [Coin(denom, amount) for denom, amount in self.balances.get(chain_name, {}).items()]


def make_snapshots(registry, holdings=None):
    """chain -> {denom: amount} into a full snapshot set (empty where absent)."""
    holdings = holdings or {}
    return {
        name: BalanceSnapshot.from_coins(
            name,
            f"{name}-address",
            [Coin(denom, amount) for denom, amount in holdings.get(name, {}).items()],
        )
        for name in registry.names
    }


@pytest.fixture
def registry():
    """The registry shipped in config/."""
    return ChainRegistry.load()


@pytest.fixture
def tri_registry():
    """Three-chain complete graph: origin 'hub' plus 'alpha' and 'beta'."""
    chains = [
        Chain(name="hub", chain_id="hub-1", address_prefix="hub"),
        Chain(name="alpha", chain_id="alpha-1", address_prefix="alpha"),
        Chain(name="beta", chain_id="beta-1", address_prefix="beta"),
    ]
    channels = {
        "hub-1": {"alpha-1": "channel-1", "beta-1": "channel-2"},
        "alpha-1": {"hub-1": "channel-10", "beta-1": "channel-11"},
        "beta-1": {"hub-1": "channel-20", "alpha-1": "channel-21"},
    }
    return ChainRegistry(chains, channels)


@pytest.fixture
def stub_source():
    return StubBalanceSource()
