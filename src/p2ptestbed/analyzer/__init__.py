# src/p2ptestbed/analyzer/__init__.py
from .network_config import ConfigLoadError, NetworkConfigParser, parse_network_config
from .report import format_report

__all__ = ['ConfigLoadError', 'NetworkConfigParser', 'parse_network_config', 'format_report']
