# src/p2ptestbed/analyzer/report.py
from .network_config import NetworkConfigParser
from ..models import HUB_NAME

SEPARATOR = '-' * 141


def format_report(parser: NetworkConfigParser) -> str:
    """Render superpeers, hub connections and superpeer connections as text"""
    lines = ["--List of Superpeers:--", ""]
    lines.extend(parser.superpeer_names())
    lines.extend(["", SEPARATOR, ""])

    lines.extend([f"--List of Connections from {HUB_NAME} to Superpeers or Peers:--", ""])
    for target in parser.connections_from(HUB_NAME):
        lines.append(f"{HUB_NAME} -> {target}")
    lines.extend(["", SEPARATOR, ""])

    lines.extend(["--List of Connections from Superpeers to Peers:--", ""])
    for superpeer, peers in parser.superpeer_connections().items():
        lines.append(f"{superpeer} -> {peers}")
    lines.extend(["", SEPARATOR])

    return "\n".join(lines)
