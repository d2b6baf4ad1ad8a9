"""Command line entry points."""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

import requests
from web3.exceptions import Web3Exception

from .config import load_settings
from .deploy import build_deploy_context
from .exceptions import DeploymentError
from .mint import run_sample_mint
from .tasks import run_tags

logger = logging.getLogger("holograph_deployments")

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def _common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--network", help="Network name from networks.json (default: $NETWORK)")
    parser.add_argument("--env-file", help="Path to a .env file (default: search from cwd)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def deploy_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Deterministically deploy Holograph ERC-721 contracts through the genesis factory",
    )
    _common_arguments(parser)
    parser.add_argument(
        "--tags",
        nargs="+",
        help="Deploy task tags to run, e.g. DeployERC721 (default: all tasks)",
    )
    parser.add_argument(
        "--companion",
        action="store_true",
        help="Deploy to the companion network of --network",
    )
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = load_settings(args.env_file)
        deploy_config = settings.deploy_config()
        if args.companion:
            deploy_config = replace(deploy_config, companion_network=True)

        context = build_deploy_context(settings, deploy_config, network=args.network)
        results = run_tags(context, args.tags)
    except (DeploymentError, Web3Exception, requests.RequestException) as e:
        logger.error("Deployment failed: %s", e)
        return 1

    for task_results in results.values():
        for result in task_results:
            state = "deployed" if result.deployed else "already deployed"
            logger.info("%s: %s (%s)", result.name, result.address, state)
    return 0


def mint_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Mint a sample token on the deployed SampleERC721 and query it",
    )
    _common_arguments(parser)
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = load_settings(args.env_file)
        if args.network:
            settings = replace(settings, network=args.network)
        return run_sample_mint(settings)
    except DeploymentError as e:
        sys.stderr.write(f"{e}\n")
        return 1


def main() -> None:
    sys.exit(deploy_main())


def mint() -> None:
    sys.exit(mint_main())


if __name__ == "__main__":
    main()
