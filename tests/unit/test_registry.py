"""
tests/unit/test_registry.py - Chain topology registry tests.
"""

import pytest

from chains.registry import ChainRegistry
from core.constants import ErrorCode
from core.exceptions import ConfigurationError
from core.models import Chain


@pytest.fixture
def sample_chains_config():
    return {
        "neutron": {"chain_id": "neutron-1", "address_prefix": "neutron",
                    "rest_endpoints": ["https://neutron.example"]},
        "osmosis": {"chain_id": "osmosis-1", "address_prefix": "osmo"},
        "stride": {"chain_id": "stride-1", "address_prefix": "stride"},
    }


@pytest.fixture
def sample_channels_config():
    return {
        "neutron-1": {"osmosis-1": "channel-10", "stride-1": "channel-8"},
        "osmosis-1": {"neutron-1": "channel-874", "stride-1": "channel-326"},
        "stride-1": {"neutron-1": "channel-123", "osmosis-1": "channel-5"},
    }


class TestShippedRegistry:
    def test_loads_six_chains_in_order(self, registry):
        assert registry.names == [
            "neutron", "osmosis", "terra", "stargaze", "cosmoshub", "stride",
        ]

    def test_chain_fields(self, registry):
        terra = registry.get("terra")

        assert terra.chain_id == "phoenix-1"
        assert terra.address_prefix == "terra"
        assert terra.rpc_endpoint.startswith("https://")
        assert terra.rest_endpoints

    def test_complete_graph(self, registry):
        for dest in registry.names:
            for src in registry.names:
                if dest != src:
                    assert registry.channel_id(dest, src).startswith("channel-")

    def test_channel_direction(self, registry):
        """channel_id(dest, src) is the channel held by the destination."""
        assert registry.channel_id("osmosis", "neutron") == "channel-874"
        assert registry.channel_id("neutron", "osmosis") == "channel-10"


class TestFromConfig:
    def test_builds_registry(self, sample_chains_config, sample_channels_config):
        registry = ChainRegistry.from_config(sample_chains_config, sample_channels_config)

        assert len(registry) == 3
        assert "osmosis" in registry
        assert "terra" not in registry
        assert registry.index_of("stride") == 2
        assert registry.get("neutron").rest_endpoints == ("https://neutron.example",)
        assert registry.get("osmosis").rest_endpoints == ()

    def test_missing_edge_rejected_at_load(self, sample_chains_config, sample_channels_config):
        del sample_channels_config["stride-1"]["osmosis-1"]

        with pytest.raises(ConfigurationError) as exc_info:
            ChainRegistry.from_config(sample_chains_config, sample_channels_config)

        assert exc_info.value.code == ErrorCode.CONFIG_MISSING_CHANNEL
        assert exc_info.value.details["missing"] == ["stride-1 <- osmosis-1"]

    def test_channels_for_unregistered_chains_ignored(self, sample_chains_config, sample_channels_config):
        sample_channels_config["juno-1"] = {"neutron-1": "channel-1"}
        sample_channels_config["neutron-1"]["juno-1"] = "channel-99"

        registry = ChainRegistry.from_config(sample_chains_config, sample_channels_config)

        assert registry.names == ["neutron", "osmosis", "stride"]

    def test_chain_without_prefix_rejected(self, sample_chains_config, sample_channels_config):
        del sample_chains_config["osmosis"]["address_prefix"]

        with pytest.raises(ConfigurationError):
            ChainRegistry.from_config(sample_chains_config, sample_channels_config)

    def test_duplicate_chain_id_rejected(self):
        chains = [
            Chain(name="a", chain_id="x-1", address_prefix="a"),
            Chain(name="b", chain_id="x-1", address_prefix="b"),
        ]
        with pytest.raises(ConfigurationError):
            ChainRegistry(chains, {})

    def test_single_chain_needs_no_channels(self):
        registry = ChainRegistry([Chain(name="solo", chain_id="solo-1", address_prefix="solo")], {})

        assert registry.names == ["solo"]


class TestLookup:
    def test_unknown_chain(self, registry):
        with pytest.raises(ConfigurationError) as exc_info:
            registry.get("juno")

        assert exc_info.value.code == ErrorCode.CONFIG_UNKNOWN_CHAIN
        assert "juno" in str(exc_info.value)

    def test_self_edge_missing(self, registry):
        with pytest.raises(ConfigurationError) as exc_info:
            registry.channel_id("stride", "stride")

        assert exc_info.value.code == ErrorCode.CONFIG_MISSING_CHANNEL

    def test_iteration_yields_chains(self, tri_registry):
        assert [chain.chain_id for chain in tri_registry] == ["hub-1", "alpha-1", "beta-1"]
