import tempfile
import unittest
from pathlib import Path

from realty_chain.domain.marketplace import MarketplaceService
from realty_chain.domain.shared import DeploymentType
from realty_chain.infrastructure.deployments_loader import load_deployments_from_yaml, sync_deployments

TOKEN = "0x" + "12" * 20
FRACTIONS = "0x" + "34" * 20


def _write_yaml(path: Path, content: str):
    path.write_text(content, encoding="utf-8")


class LoadDeploymentsTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.base = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_missing_file_raises(self):
        with self.assertRaisesRegex(RuntimeError, "deployments file not found"):
            load_deployments_from_yaml(str(self.base / "missing.yaml"))

    def test_invalid_structure_raises(self):
        path = self.base / "bad.yaml"
        _write_yaml(path, "[]")
        with self.assertRaisesRegex(RuntimeError, "Invalid deployments.yaml format"):
            load_deployments_from_yaml(str(path))

    def test_invalid_address_raises(self):
        path = self.base / "invalid.yaml"
        _write_yaml(
            path,
            """
deployments:
  - address: "0x1234"
    type: tokenization
""",
        )
        with self.assertRaisesRegex(RuntimeError, "Invalid deployment entry"):
            load_deployments_from_yaml(str(path))

    def test_unknown_type_raises(self):
        path = self.base / "invalid.yaml"
        _write_yaml(
            path,
            f"""
deployments:
  - address: "{TOKEN}"
    type: auction
""",
        )
        with self.assertRaisesRegex(RuntimeError, "Invalid deployment entry"):
            load_deployments_from_yaml(str(path))

    def test_loads_and_normalizes_entries(self):
        path = self.base / "deployments.yaml"
        _write_yaml(
            path,
            f"""
deployments:
  - address: " {TOKEN} "
    type: TokenizationContract
  - address: "{FRACTIONS}"
    type: fractional-registry
    property_token: "{TOKEN}"
  - address: "{FRACTIONS[:-2]}99"
""",
        )

        records = load_deployments_from_yaml(str(path))

        self.assertEqual(
            [(r.address, r.type, r.linked_address) for r in records],
            [
                (TOKEN, DeploymentType.TOKENIZATION_CONTRACT, None),
                (FRACTIONS, DeploymentType.FRACTIONAL_REGISTRY, TOKEN),
                (FRACTIONS[:-2] + "99", DeploymentType.CUSTOM, None),
            ],
        )


class FakeConnection:
    def bind(self, address, kind, abi=None):
        raise AssertionError("registering known deployments must not bind contracts")


class SyncDeploymentsTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.base = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_sync_registers_every_entry(self):
        path = self.base / "deployments.yaml"
        _write_yaml(
            path,
            f"""
deployments:
  - address: "{TOKEN}"
    type: tokenization
  - address: "{FRACTIONS}"
    type: fractional
    property_token: "{TOKEN}"
""",
        )
        marketplace = MarketplaceService(FakeConnection())

        count = sync_deployments(marketplace, str(path))

        self.assertEqual(count, 2)
        self.assertEqual(
            marketplace.list_deployed(),
            {
                TOKEN: {"address": TOKEN, "type": "TokenizationContract"},
                FRACTIONS: {"address": FRACTIONS, "type": "FractionalRegistry", "propertyTokenAddress": TOKEN},
            },
        )


if __name__ == "__main__":
    unittest.main()
