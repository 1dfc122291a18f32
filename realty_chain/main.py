from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os

from dotenv import load_dotenv

from .application.bootstrap import bootstrap_app
from .application.container import AppConfig, AppContainer
from .application.metrics import configure_metrics_logger
from .domain.domains import ENS_REGISTRY_ADDRESS
from .infrastructure.chain import ConnectionConfig
from .infrastructure.metrics import metrics

load_dotenv()
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in {"0", "false", "no"}


def load_app_config() -> AppConfig:
    connection = ConnectionConfig(
        network=os.getenv("NETWORK", "mainnet").strip() or "mainnet",
        rpc_url=os.getenv("RPC_URL", "").strip() or None,
        gateway_api_key=os.getenv("INFURA_API_KEY", "").strip() or None,
        use_gateway=_flag("USE_INFURA", "1"),
        private_key=os.getenv("PRIVATE_KEY", "").strip() or None,
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        receipt_timeout=float(os.getenv("RECEIPT_TIMEOUT", "120")),
    )
    allowed_hosts_raw = os.getenv("METADATA_ALLOWED_HOSTS", "").strip()
    allowed_hosts = {
        host.strip().lower()
        for host in allowed_hosts_raw.split(",")
        if host.strip()
    } or None
    config = AppConfig(
        connection=connection,
        ens_registry_address=os.getenv("ENS_REGISTRY_ADDRESS", "").strip() or ENS_REGISTRY_ADDRESS,
        metadata_allowed_hosts=allowed_hosts,
        metadata_max_bytes=int(os.getenv("METADATA_MAX_BYTES", "1000000")),
        artifacts_dir=os.getenv("ARTIFACTS_DIR", "").strip() or None,
        deployments_file=os.getenv("DEPLOYMENTS_FILE", "").strip() or None,
        metrics_log_path=os.getenv("METRICS_LOG_PATH", "").strip() or None,
    )
    logger.info(
        "Config loaded: network=%s, rpc=%s, signer=%s, metadata_hosts=%s, artifacts=%s, deployments=%s",
        connection.network,
        "custom" if connection.rpc_url else ("infura" if connection.use_gateway and connection.gateway_api_key else "public"),
        "yes" if connection.private_key else "no",
        ",".join(sorted(config.metadata_allowed_hosts)) if config.metadata_allowed_hosts else "any",
        config.artifacts_dir or "-",
        config.deployments_file or "-",
    )
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="realty-chain", description="Real-estate tokenization toolkit")
    commands = parser.add_subparsers(dest="command", required=True)

    resolve = commands.add_parser("resolve", help="Resolve a blockchain domain")
    resolve.add_argument("domain")

    verify = commands.add_parser("verify", help="Check that a domain points at an address")
    verify.add_argument("domain")
    verify.add_argument("address")

    prop = commands.add_parser("property", help="Show property records of a domain")
    prop.add_argument("domain")

    token = commands.add_parser("token", help="Read token URI, owner and metadata")
    token.add_argument("contract")
    token.add_argument("token_id")

    commands.add_parser("deployed", help="List known deployed contracts")
    commands.add_parser("gas-price", help="Show the current gas price in wei")
    return parser


async def run_command(container: AppContainer, args: argparse.Namespace) -> dict:
    if args.command == "resolve":
        return (await container.domains.resolve(args.domain)).to_dict()
    if args.command == "verify":
        return (await container.domains.verify_ownership(args.domain, args.address)).to_dict()
    if args.command == "property":
        return (await container.domains.extract_property_metadata(args.domain)).to_dict()
    if args.command == "token":
        return (await container.tokens.read_metadata(args.contract, args.token_id)).to_dict()
    if args.command == "deployed":
        return {"success": True, "contracts": container.marketplace.list_deployed()}
    if args.command == "gas-price":
        return {"success": True, "gas_price": await container.connection.estimate_gas_price()}
    raise ValueError(f"Unknown command: {args.command}")


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_app_config()
    metrics.configure(
        configure_metrics_logger(config.metrics_log_path) if config.metrics_log_path else None,
        network=config.connection.network,
    )

    logger.info("Bootstrapping application")
    async with bootstrap_app(config) as container:
        try:
            result = await run_command(container, args)
        except Exception:
            logger.exception("Command %s failed", args.command)
            raise
    print(json.dumps(result, ensure_ascii=False, indent=2, default=str))
    return 0 if result.get("success", True) else 1


if __name__ == "__main__":
    try:
        raise SystemExit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted by user, shutting down")
