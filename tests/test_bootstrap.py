import json
import tempfile
import unittest
from pathlib import Path

from realty_chain.application import AppConfig, bootstrap_app
from realty_chain.domain.shared import ContractKind, ErrorKind
from realty_chain.infrastructure.chain import ConnectionConfig, load_artifacts

TOKEN = "0x" + "12" * 20


class BootstrapTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.base = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    async def test_offline_container_registers_known_deployments(self):
        deployments = self.base / "deployments.yaml"
        deployments.write_text(
            f'deployments:\n  - address: "{TOKEN}"\n    type: tokenization\n',
            encoding="utf-8",
        )
        config = AppConfig(
            connection=ConnectionConfig(network="atlantis"),
            deployments_file=str(deployments),
        )

        async with bootstrap_app(config) as container:
            self.assertFalse(container.connection.is_connected())
            self.assertEqual(list(container.marketplace.list_deployed()), [TOKEN])

            result = await container.domains.resolve("parcel42.eth")

        self.assertFalse(result.success)
        self.assertEqual(result.error_kind, ErrorKind.UNAVAILABLE)


class ArtifactLoadingTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.base = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_hardhat_and_foundry_layouts(self):
        hardhat = self.base / "artifacts" / "contracts" / "PropertyMarketplace.sol"
        hardhat.mkdir(parents=True)
        (hardhat / "PropertyMarketplace.json").write_text(
            json.dumps({"abi": [{"type": "constructor"}], "bytecode": "0x6080"}),
            encoding="utf-8",
        )
        foundry = self.base / "out" / "FractionalRegistry.sol"
        foundry.mkdir(parents=True)
        (foundry / "FractionalRegistry.json").write_text(
            json.dumps({"abi": [], "bytecode": {"object": "6081"}}),
            encoding="utf-8",
        )

        artifacts = load_artifacts(str(self.base))

        self.assertEqual(artifacts[ContractKind.MARKETPLACE].bytecode, "0x6080")
        self.assertEqual(artifacts[ContractKind.FRACTIONAL_REGISTRY].bytecode, "0x6081")

    def test_missing_directory_disables_deployments(self):
        self.assertEqual(load_artifacts(str(self.base / "nope")), {})
        self.assertEqual(load_artifacts(None), {})


if __name__ == "__main__":
    unittest.main()
