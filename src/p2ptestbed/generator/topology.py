# src/p2ptestbed/generator/topology.py
import os
import json
import logging
import random
from decimal import Decimal, InvalidOperation
from typing import Dict, Any, List

import networkx as nx

from ..models import HUB_NAME, Peer, Connection, NetworkTopology

__all__ = [
    'TopologyFormatError', 'generate_topology', 'write_topology',
    'load_topology', 'build_graph', 'summarize_topology',
]

logger = logging.getLogger(__name__)

# Fixed capacities of the hub (Kbit/s)
HUB_MAX_UPLOAD = 28664
HUB_MAX_DOWNLOAD = 79823

# Ordinary peers: download 80-90 Mbit/s, upload 25-30 Mbit/s
DOWNLOAD_BASE, DOWNLOAD_SPREAD = 80000, 10000
UPLOAD_BASE, UPLOAD_SPREAD = 25000, 5000

# Latency in hundredths of a ms (40.00-80.00), loss in 1/10000 (0.0010-0.0020)
LATENCY_BASE, LATENCY_SPREAD = 4000, 4000
LOSS_BASE, LOSS_SPREAD = 10, 10


class TopologyFormatError(Exception):
    """Raised when a topology file does not have the generated shape."""
    pass


def _hub_peer() -> Peer:
    return Peer(name=HUB_NAME, max_upload=HUB_MAX_UPLOAD, max_download=HUB_MAX_DOWNLOAD)


def _random_peer(peer_id: int, rng: random.Random) -> Peer:
    download = DOWNLOAD_BASE + rng.randrange(DOWNLOAD_SPREAD)
    upload = UPLOAD_BASE + rng.randrange(UPLOAD_SPREAD)
    return Peer(name=str(peer_id), max_upload=upload, max_download=download)


def _random_connection(source: Peer, target: Peer, rng: random.Random) -> Connection:
    latency = Decimal(LATENCY_BASE + rng.randrange(LATENCY_SPREAD)).scaleb(-2)
    loss = Decimal(LOSS_BASE + rng.randrange(LOSS_SPREAD)).scaleb(-4)
    return Connection(
        source_name=source.name,
        target_name=target.name,
        bandwidth=min(source.max_upload, target.max_download),
        latency=latency,
        loss=loss
    )


def generate_topology(peer_count: int, rng: random.Random) -> NetworkTopology:
    """Build a full-mesh topology of the hub plus ``peer_count`` random peers.

    Connections cover every ordered pair of distinct peers, source-major in
    peer order, so a fixed seed always yields the same document.
    """
    if peer_count < 0:
        raise ValueError(f"peer_count must be >= 0, got {peer_count}")

    peers = [_hub_peer()]
    for peer_id in range(1, peer_count + 1):
        peers.append(_random_peer(peer_id, rng))
    logger.info(f"Generated {len(peers)} peers (including {HUB_NAME})")

    by_name = {peer.name: peer for peer in peers}
    mesh = nx.complete_graph([peer.name for peer in peers], create_using=nx.DiGraph)

    connections = [
        _random_connection(by_name[source], by_name[target], rng)
        for source, target in mesh.edges()
    ]
    logger.info(f"Generated {len(connections)} directed connections")

    return NetworkTopology(peers=tuple(peers), connections=tuple(connections))


def write_topology(topology: NetworkTopology, path: str) -> str:
    """Write the topology as pretty-printed JSON and return the path"""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(topology.to_dict(), f, indent=2)

    logger.info(f"Network topology JSON has been saved to: {path}")
    return path


def _parse_peer(entry: Dict[str, Any]) -> Peer:
    return Peer(
        name=str(entry['name']),
        max_upload=int(entry['maxUpload']),
        max_download=int(entry['maxDownload'])
    )


def _parse_connection(entry: Dict[str, Any]) -> Connection:
    return Connection(
        source_name=str(entry['sourceName']),
        target_name=str(entry['targetName']),
        bandwidth=int(entry['bandwidth']),
        latency=Decimal(str(entry['latency'])),
        loss=Decimal(str(entry['loss']))
    )


def load_topology(path: str) -> NetworkTopology:
    """Read a generated topology file back into the model"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TopologyFormatError(f"Invalid JSON in topology file {path}: {e}") from e

    if not isinstance(data, dict):
        raise TopologyFormatError(f"Topology file {path} must contain a JSON object")

    try:
        peers: List[Peer] = [_parse_peer(entry) for entry in data.get('peers') or []]
        connections: List[Connection] = [
            _parse_connection(entry) for entry in data.get('connections') or []
        ]
        return NetworkTopology(
            peers=tuple(peers),
            connections=tuple(connections),
            filename=data.get('filename', ''),
            filesize=int(data.get('filesize', 0))
        )
    except (KeyError, TypeError, ValueError, InvalidOperation) as e:
        raise TopologyFormatError(f"Malformed topology file {path}: {e}") from e


def build_graph(topology: NetworkTopology) -> nx.DiGraph:
    """Directed graph view with capacities on nodes and link metrics on edges"""
    G = nx.DiGraph()
    for peer in topology.peers:
        G.add_node(peer.name, max_upload=peer.max_upload, max_download=peer.max_download)
    for conn in topology.connections:
        G.add_edge(
            conn.source_name,
            conn.target_name,
            bandwidth=conn.bandwidth,
            latency=conn.latency,
            loss=conn.loss
        )
    return G


def summarize_topology(topology: NetworkTopology) -> Dict[str, Any]:
    """Basic graph metrics of a generated topology"""
    G = build_graph(topology)
    node_count = G.number_of_nodes()
    return {
        'node_count': node_count,
        'edge_count': G.number_of_edges(),
        'density': nx.density(G),
        'average_degree': sum(dict(G.out_degree()).values()) / node_count if node_count > 0 else 0
    }
