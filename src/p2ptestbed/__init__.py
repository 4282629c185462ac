"""
p2ptestbed
Topology generation and network configuration analysis for the P2P testbed.
"""

from .models import HUB_NAME

__version__ = '0.1.0'
__all__ = ['HUB_NAME']
