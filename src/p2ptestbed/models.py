# src/p2ptestbed/models.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Tuple

__all__ = [
    'HUB_NAME', 'TOPOLOGY_FILENAME', 'TOPOLOGY_FILESIZE',
    'Peer', 'Connection', 'NetworkTopology',
    'PeerConnection', 'Superpeer', 'NetworkConfig',
]

# Reserved name of the origin server, shared by generator and analyzer
HUB_NAME = 'lectureStudioServer'

# Placeholder metadata the testbed expects in every generated topology
TOPOLOGY_FILENAME = 'test.pdf'
TOPOLOGY_FILESIZE = 5000

LATENCY_PRECISION = Decimal('0.01')
LOSS_PRECISION = Decimal('0.0001')


@dataclass(frozen=True)
class Peer:
    """A peer with its upload/download capacity"""
    name: str
    max_upload: int
    max_download: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'maxUpload': self.max_upload,
            'maxDownload': self.max_download
        }


@dataclass(frozen=True)
class Connection:
    """Directed link between two peers.

    Latency and loss are fixed-point decimals; they are only turned into
    strings ("NN.NN" / "0.NNNN") when written out.
    """
    source_name: str
    target_name: str
    bandwidth: int
    latency: Decimal
    loss: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sourceName': self.source_name,
            'targetName': self.target_name,
            'bandwidth': self.bandwidth,
            'latency': format(self.latency.quantize(LATENCY_PRECISION), 'f'),
            'loss': format(self.loss.quantize(LOSS_PRECISION), 'f')
        }


@dataclass(frozen=True)
class NetworkTopology:
    """Generated testbed input: peers plus the full set of directed links"""
    peers: Tuple[Peer, ...] = ()
    connections: Tuple[Connection, ...] = ()
    filename: str = TOPOLOGY_FILENAME
    filesize: int = TOPOLOGY_FILESIZE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'filename': self.filename,
            'filesize': self.filesize,
            'peers': [peer.to_dict() for peer in self.peers],
            'connections': [conn.to_dict() for conn in self.connections]
        }


@dataclass(frozen=True)
class PeerConnection:
    """Resolved source -> target assignment from the P2P algorithm"""
    source_name: str
    target_name: str


@dataclass(frozen=True)
class Superpeer:
    name: str


@dataclass(frozen=True)
class NetworkConfig:
    """Output of the P2P algorithm as consumed by the analyzer"""
    peer2peer: Tuple[PeerConnection, ...] = ()
    superpeers: Tuple[Superpeer, ...] = ()
