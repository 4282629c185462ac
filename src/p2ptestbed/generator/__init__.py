# src/p2ptestbed/generator/__init__.py
from .topology import (
    TopologyFormatError,
    generate_topology,
    write_topology,
    load_topology,
    build_graph,
    summarize_topology,
)

__all__ = [
    'TopologyFormatError', 'generate_topology', 'write_topology',
    'load_topology', 'build_graph', 'summarize_topology',
]
