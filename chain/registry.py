# app/chain/registry.py
"""
Supported networks and their Kleros subgraph deployments.
Pure lookup, no state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ChainInfo:
    chain_id: int
    name: str
    subgraph_id: str


SUPPORTED_CHAINS: Dict[int, ChainInfo] = {
    1: ChainInfo(1, "Ethereum Mainnet", "BqbBhB4R5pNAtdYya2kcojMrQMp8nVHioUnP22qN8JoN"),
    100: ChainInfo(100, "Gnosis Chain", "FxhLntVBELrZ4t1c2HNNvLWEYfBjpB8iKZiEymuFSPSr"),
}

SUPPORTED_CHAIN_IDS = tuple(SUPPORTED_CHAINS)

NETWORK_NAMES = {cid: info.name for cid, info in SUPPORTED_CHAINS.items()}

THEGRAPH_GATEWAY = "https://gateway.thegraph.com/api/{api_key}/subgraphs/id/{subgraph_id}"


def is_supported_chain_id(chain_id) -> bool:
    # bool is an int subclass; True must not pass as chain 1
    if isinstance(chain_id, bool) or not isinstance(chain_id, int):
        return False
    return chain_id in SUPPORTED_CHAINS


def network_name(chain_id: int) -> str:
    info = SUPPORTED_CHAINS.get(chain_id)
    return info.name if info else f"chain {chain_id}"


def default_subgraph_url(chain_id: int, api_key: str) -> str:
    info = SUPPORTED_CHAINS[chain_id]
    return THEGRAPH_GATEWAY.format(api_key=api_key, subgraph_id=info.subgraph_id)
