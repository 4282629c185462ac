# src/p2ptestbed/cli.py
import sys
import random
import logging
import argparse
from typing import List, Optional

from .config import load_settings
from .generator import generate_topology, write_topology, summarize_topology
from .analyzer import ConfigLoadError, NetworkConfigParser, format_report

logger = logging.getLogger(__name__)


def setup_logging(level: str = 'INFO'):
    """Log progress lines to stdout"""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def parse_peer_count(raw: Optional[str], default: int) -> int:
    """Peer count from the command line, falling back to ``default``"""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Argument must be an integer, got {raw!r}. Using default value of {default}.")
        return default
    if value < 0:
        logger.warning(f"Peer count must not be negative, got {value}. Using default value of {default}.")
        return default
    return value


def parse_seed(raw: Optional[str]) -> Optional[int]:
    """Seed from the command line; None when absent or not an integer"""
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Seed must be an integer, got {raw!r}. Ignoring it.")
        return None


def warn_extra_arguments(extra: List[str]):
    if extra:
        logger.warning(f"Ignoring unexpected arguments: {' '.join(extra)}")


def parse_flag(raw: Optional[str], default: bool) -> bool:
    # Only a case-insensitive "true" enables the flag
    if raw is None:
        return default
    return raw.strip().lower() == 'true'


def generate_main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    setup_logging(settings.log_level)

    parser = argparse.ArgumentParser(
        prog='p2ptestbed-generate',
        description='Generate a random full-mesh network topology for the P2P testbed'
    )
    parser.add_argument('peer_count', nargs='?', help='number of peers, excluding the hub')
    parser.add_argument('--seed', default=None, help='seed for reproducible output')
    parser.add_argument('-o', '--output', default=None, help='write the topology to this path')
    args, extra = parser.parse_known_args(argv)
    warn_extra_arguments(extra)

    peer_count = parse_peer_count(args.peer_count, settings.default_peers)
    seed = parse_seed(args.seed)
    if seed is None:
        seed = settings.seed
    rng = random.Random(seed)

    topology = generate_topology(peer_count, rng)
    logger.info(f"Topology summary: {summarize_topology(topology)}")

    output_path = args.output or settings.topology_path(peer_count + 1)
    try:
        write_topology(topology, output_path)
    except OSError as e:
        logger.error(f"Error while writing the JSON file {output_path}: {e}")

    return 0


def analyze_main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    setup_logging(settings.log_level)

    parser = argparse.ArgumentParser(
        prog='p2ptestbed-analyze',
        description='Report superpeers and connections of a computed network configuration'
    )
    parser.add_argument('peer_count', nargs='?', help='number of peers the configuration was computed for')
    parser.add_argument('use_superpeers', nargs='?', help="'true' if the run used superpeers")
    parser.add_argument('-i', '--input', default=None, help='read the configuration from this path')
    args, extra = parser.parse_known_args(argv)
    warn_extra_arguments(extra)

    peer_count = parse_peer_count(args.peer_count, settings.default_analyze_peers)
    use_superpeers = parse_flag(args.use_superpeers, True)
    input_path = args.input or settings.config_path(peer_count, use_superpeers)

    logger.info("Step Started: Integrating P2P algorithm")
    try:
        config_parser = NetworkConfigParser(input_path)
    except ConfigLoadError as e:
        logger.error(str(e))
        return 1

    print(format_report(config_parser))
    logger.info("Step Done: Integrating P2P algorithm is done.")
    return 0
