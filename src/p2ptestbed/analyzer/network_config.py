# src/p2ptestbed/analyzer/network_config.py
import json
import logging
from typing import Any, Dict, List

from ..models import HUB_NAME, NetworkConfig, PeerConnection, Superpeer

__all__ = ['ConfigLoadError', 'NetworkConfigParser', 'parse_network_config']

logger = logging.getLogger(__name__)


class ConfigLoadError(Exception):
    """Raised when a network configuration file cannot be loaded."""
    pass


def _required_str(entry: Dict[str, Any], key: str, section: str, index: int) -> str:
    value = entry.get(key)
    # Numeric names such as {"name": 5} are accepted as "5"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ConfigLoadError(f"{section}[{index}] is missing required string field '{key}'")
    return value


def _entries(data: Dict[str, Any], section: str) -> List[Dict[str, Any]]:
    """Entries of an optional list section; absent or null means empty"""
    value = data.get(section)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigLoadError(f"'{section}' must be a list, got {type(value).__name__}")
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigLoadError(f"{section}[{index}] must be an object")
    return value


def parse_network_config(data: Any) -> NetworkConfig:
    """Validate decoded JSON and convert it into a NetworkConfig"""
    if not isinstance(data, dict):
        raise ConfigLoadError("Network configuration must be a JSON object")

    peer2peer = tuple(
        PeerConnection(
            source_name=_required_str(entry, 'sourceName', 'peer2peer', i),
            target_name=_required_str(entry, 'targetName', 'peer2peer', i)
        )
        for i, entry in enumerate(_entries(data, 'peer2peer'))
    )
    superpeers = tuple(
        Superpeer(name=_required_str(entry, 'name', 'superpeers', i))
        for i, entry in enumerate(_entries(data, 'superpeers'))
    )
    return NetworkConfig(peer2peer=peer2peer, superpeers=superpeers)


class NetworkConfigParser:
    """Read-only views over the network configuration computed by the P2P
    algorithm: superpeers, peer-to-peer assignments, the superpeer -> peers
    mapping and the ordinary peers.

    Loading happens once in the constructor; every query afterwards is a
    pure function of the loaded config.
    """

    def __init__(self, config_file_path: str):
        self.config_file_path = config_file_path
        logger.info(f"Initializing NetworkConfigParser with file: {config_file_path}")

        try:
            with open(config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigLoadError(f"Cannot read network configuration {config_file_path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigLoadError(f"Invalid JSON in network configuration {config_file_path}: {e}") from e

        self.config = parse_network_config(data)
        logger.info("Network configuration successfully loaded.")

    def superpeer_names(self) -> List[str]:
        """Names of all superpeers in file order, empty if there are none"""
        logger.debug("Extracting superpeer names.")
        if not self.config.superpeers:
            logger.debug("No superpeers found in the configuration.")
        return [superpeer.name for superpeer in self.config.superpeers]

    def peer_connections(self) -> List[PeerConnection]:
        logger.debug("Retrieving peer-to-peer connections.")
        return list(self.config.peer2peer)

    def connections_from(self, source_name: str) -> List[str]:
        """Targets of every connection leaving ``source_name``, in file order"""
        return [
            conn.target_name for conn in self.config.peer2peer
            if conn.source_name == source_name
        ]

    def superpeer_connections(self) -> Dict[str, List[str]]:
        """Map each superpeer to the peers it is directly connected to"""
        logger.debug("Mapping superpeers to their connected peers.")
        return {name: self.connections_from(name) for name in self.superpeer_names()}

    def peers(self) -> List[str]:
        """Distinct target peers that are neither superpeers nor the hub"""
        logger.debug(f"Gathering distinct peer names, excluding superpeers and {HUB_NAME}.")
        excluded = set(self.superpeer_names())
        excluded.add(HUB_NAME)

        seen = set()
        peers = []
        for conn in self.config.peer2peer:
            name = conn.target_name
            if name in excluded or name in seen:
                continue
            seen.add(name)
            peers.append(name)
        return peers
