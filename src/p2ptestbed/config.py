# src/p2ptestbed/config.py
import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.join('~', 'Desktop', 'master-thesis-ozcankaraca', 'data-for-testbed')
DEFAULT_GENERATE_PEERS = 75
DEFAULT_ANALYZE_PEERS = 35


@dataclass
class Settings:
    data_dir: str = DEFAULT_DATA_DIR
    default_peers: int = DEFAULT_GENERATE_PEERS
    default_analyze_peers: int = DEFAULT_ANALYZE_PEERS
    seed: Optional[int] = None
    log_level: str = 'INFO'

    @property
    def base_dir(self) -> str:
        return os.path.expanduser(self.data_dir)

    def topology_path(self, total_peers: int) -> str:
        """Generator output, named after the peer count including the hub"""
        return os.path.join(self.base_dir, 'inputs-new', f'input-data-{total_peers}.json')

    def config_path(self, peer_count: int, use_superpeers: bool) -> str:
        """P2P algorithm output consumed by the analyzer"""
        folder = 'outputs-with-superpeer' if use_superpeers else 'outputs-without-superpeer'
        return os.path.join(self.base_dir, folder, f'output-data-{peer_count}.json')


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer, using {default}")
        return default


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Build settings from the environment, reading a .env file first if present"""
    load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True))
    return Settings(
        data_dir=os.environ.get('P2PTESTBED_DATA_DIR', DEFAULT_DATA_DIR),
        default_peers=_env_int('P2PTESTBED_DEFAULT_PEERS', DEFAULT_GENERATE_PEERS),
        default_analyze_peers=_env_int('P2PTESTBED_DEFAULT_ANALYZE_PEERS', DEFAULT_ANALYZE_PEERS),
        seed=_env_int('P2PTESTBED_SEED', None),
        log_level=os.environ.get('P2PTESTBED_LOG_LEVEL', 'INFO').upper()
    )
