"""
chains/registry.py - Chain topology registry.

Static table of chains plus the ICS-20 channel matrix between them.

Pipeline:
1. Read chains.yaml -> ordered Chain records (index = enumeration order)
2. Read channels.yaml -> channel matrix indexed by (destination, source)
3. Validate that every ordered pair of distinct chains has a channel
"""

from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from config import load_chains, load_channels
from core.constants import ErrorCode
from core.exceptions import ConfigurationError
from core.logging import get_logger
from core.models import Chain

logger = get_logger(__name__)


class ChainRegistry:
    """
    Read-only registry of chains and the channels connecting them.

    Chains are enumerated in registration order. Channels live in a
    square matrix where channels[dest][src] is the channel the destination
    chain uses to receive tokens from the source chain.
    """

    def __init__(
        self,
        chains: Sequence[Chain],
        channels: Dict[str, Dict[str, str]],
    ):
        self._chains: List[Chain] = list(chains)
        self._index: Dict[str, int] = {}
        self._by_chain_id: Dict[str, int] = {}

        for i, chain in enumerate(self._chains):
            if chain.name in self._index:
                raise ConfigurationError(
                    f"Duplicate chain name: {chain.name}",
                    details={"chain": chain.name},
                )
            if chain.chain_id in self._by_chain_id:
                raise ConfigurationError(
                    f"Duplicate chain id: {chain.chain_id}",
                    details={"chain_id": chain.chain_id},
                )
            self._index[chain.name] = i
            self._by_chain_id[chain.chain_id] = i

        self._matrix = self._build_matrix(channels)

    def _build_matrix(self, channels: Dict[str, Dict[str, str]]) -> List[List[Optional[str]]]:
        """Build and validate the (destination, source) channel matrix."""
        size = len(self._chains)
        matrix: List[List[Optional[str]]] = [[None] * size for _ in range(size)]

        for dest_id, sources in channels.items():
            if dest_id not in self._by_chain_id:
                logger.warning(
                    f"Ignoring channels for unregistered chain {dest_id}",
                    extra={"context": {"chain_id": dest_id}},
                )
                continue
            for src_id, channel_id in (sources or {}).items():
                if src_id not in self._by_chain_id:
                    logger.warning(
                        f"Ignoring channel {dest_id} <- {src_id}: source not registered",
                        extra={"context": {"dest_chain_id": dest_id, "src_chain_id": src_id}},
                    )
                    continue
                matrix[self._by_chain_id[dest_id]][self._by_chain_id[src_id]] = str(channel_id)

        missing = [
            (self._chains[d].chain_id, self._chains[s].chain_id)
            for d in range(size)
            for s in range(size)
            if d != s and matrix[d][s] is None
        ]
        if missing:
            raise ConfigurationError(
                f"Channel table is incomplete: {len(missing)} missing edge(s)",
                code=ErrorCode.CONFIG_MISSING_CHANNEL,
                details={"missing": [f"{d} <- {s}" for d, s in missing]},
            )

        return matrix

    @classmethod
    def from_config(
        cls,
        chains_config: Dict[str, Any],
        channels_config: Dict[str, Dict[str, str]],
    ) -> "ChainRegistry":
        """Build a registry from parsed chains.yaml / channels.yaml dicts."""
        chains = []
        for name, cfg in chains_config.items():
            cfg = cfg or {}
            if "chain_id" not in cfg or "address_prefix" not in cfg:
                raise ConfigurationError(
                    f"Chain {name} needs chain_id and address_prefix",
                    details={"chain": name},
                )
            chains.append(Chain(
                name=name,
                chain_id=str(cfg["chain_id"]),
                address_prefix=str(cfg["address_prefix"]),
                rpc_endpoint=cfg.get("rpc_endpoint", ""),
                rest_endpoints=tuple(cfg.get("rest_endpoints") or ()),
            ))
        return cls(chains, channels_config)

    @classmethod
    def load(cls, config_dir: Optional[Path] = None) -> "ChainRegistry":
        """Load the registry from the YAML files in config_dir."""
        registry = cls.from_config(load_chains(config_dir), load_channels(config_dir))
        logger.info(
            f"Loaded {len(registry)} chains",
            extra={"context": {"chains": registry.names}},
        )
        return registry

    def get(self, name: str) -> Chain:
        """Get a chain by name."""
        if name not in self._index:
            raise ConfigurationError(
                f"Unknown chain: {name}",
                code=ErrorCode.CONFIG_UNKNOWN_CHAIN,
                details={"chain": name},
            )
        return self._chains[self._index[name]]

    def index_of(self, name: str) -> int:
        """Enumeration index of a chain."""
        self.get(name)
        return self._index[name]

    def channel_id(self, dest: str, src: str) -> str:
        """
        Channel on the destination chain that receives from the source chain.

        Raises:
            ConfigurationError: Unknown chain or no edge (e.g. dest == src)
        """
        channel = self._matrix[self.index_of(dest)][self.index_of(src)]
        if channel is None:
            raise ConfigurationError(
                f"No channel registered for {dest} <- {src}",
                code=ErrorCode.CONFIG_MISSING_CHANNEL,
                details={"dest": dest, "src": src},
            )
        return channel

    @property
    def names(self) -> List[str]:
        """Chain names in enumeration order."""
        return [chain.name for chain in self._chains]

    @property
    def chains(self) -> List[Chain]:
        return list(self._chains)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[Chain]:
        return iter(self._chains)

    def __len__(self) -> int:
        return len(self._chains)
