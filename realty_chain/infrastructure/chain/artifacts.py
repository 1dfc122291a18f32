from __future__ import annotations

import json
import logging
from pathlib import Path

from ...domain.marketplace import ContractArtifact
from ...domain.shared.models import ContractKind

logger = logging.getLogger(__name__)

DEPLOYABLE_KINDS = (ContractKind.MARKETPLACE, ContractKind.FRACTIONAL_REGISTRY)


def load_artifact(path: Path) -> ContractArtifact:
    """Read a Hardhat (``bytecode: "0x.."``) or Foundry (``bytecode: {"object": ..}``) artifact."""
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict) or not isinstance(data.get("abi"), list):
        raise RuntimeError(f"Invalid contract artifact: {path}")

    bytecode = data.get("bytecode") or ""
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object") or ""
    if bytecode and not bytecode.startswith("0x"):
        bytecode = f"0x{bytecode}"
    return ContractArtifact(abi=data["abi"], bytecode=bytecode)


def load_artifacts(directory: str | None) -> dict[ContractKind, ContractArtifact]:
    if not directory:
        return {}
    base = Path(directory)
    if not base.is_dir():
        logger.warning("Artifacts directory '%s' does not exist; deployments are disabled", base)
        return {}

    artifacts: dict[ContractKind, ContractArtifact] = {}
    for kind in DEPLOYABLE_KINDS:
        path = next(iter(sorted(base.rglob(f"{kind.value}.json"))), None)
        if path is None:
            logger.warning("No %s artifact under '%s'", kind.value, base)
            continue
        artifacts[kind] = load_artifact(path)
        logger.info("Loaded %s artifact from %s", kind.value, path)
    return artifacts
