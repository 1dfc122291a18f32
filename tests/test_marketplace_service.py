import unittest

from realty_chain.domain.marketplace import ContractArtifact, DeployedContractRecord, MarketplaceService
from realty_chain.domain.shared import ContractKind, DeploymentType, ErrorKind, TransactionReverted

MARKET = "0x" + "12" * 20
TOKEN = "0x" + "34" * 20
DEPLOYED = "0x" + "56" * 20
FRACTIONS = "0x" + "78" * 20

ARTIFACTS = {
    ContractKind.MARKETPLACE: ContractArtifact(abi=[{"type": "constructor"}], bytecode="0x6080"),
    ContractKind.FRACTIONAL_REGISTRY: ContractArtifact(abi=[{"type": "constructor"}], bytecode="0x6081"),
}


class FakeMarket:
    def __init__(self, address, kind):
        self.address = address
        self.kind = kind
        self.listing = None
        self.calls = []
        self.transactions = []

    async def call(self, function, *args):
        self.calls.append((function, args))
        return self.listing

    async def transact(self, function, *args, value=0):
        self.transactions.append((function, args, value))
        return {"transactionHash": "0xfeed", "status": 1}

    def decode_events(self, receipt, event):
        return []


class FakeConnection:
    def __init__(self):
        self.handles = {}
        self.binds = []
        self.deployments = []
        self.deploy_receipts = []

    def handle(self, address):
        return self.handles.setdefault(address.lower(), FakeMarket(address, None))

    def signer_address(self):
        return "0x" + "90" * 20

    def bind(self, address, kind, abi=None):
        self.binds.append((address, kind, abi))
        handle = self.handle(address)
        handle.kind = kind
        return handle

    async def deploy(self, abi, bytecode, *args):
        self.deployments.append((bytecode, args))
        receipt = self.deploy_receipts.pop(0)
        if isinstance(receipt, Exception):
            raise receipt
        return receipt


class DeploymentTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.connection = FakeConnection()
        self.service = MarketplaceService(self.connection, artifacts=ARTIFACTS)

    async def test_deploy_tokenization_contract_records_it(self):
        self.connection.deploy_receipts.append({"contractAddress": DEPLOYED, "transactionHash": "0xabc"})

        result = await self.service.deploy_tokenization_contract("Parcels", "PCL")

        self.assertTrue(result.success)
        self.assertEqual(result.contract_address, DEPLOYED)
        self.assertEqual(result.transaction_hash, "0xabc")
        self.assertEqual(self.connection.deployments, [("0x6080", ("Parcels", "PCL"))])
        self.assertIn(DEPLOYED, self.service.contracts)
        self.assertEqual(
            self.service.list_deployed(),
            {DEPLOYED: {"address": DEPLOYED, "type": "TokenizationContract"}},
        )

    async def test_deploy_fractional_registry_links_property_token(self):
        self.connection.deploy_receipts.append({"contractAddress": FRACTIONS, "transactionHash": "0xdef"})

        result = await self.service.deploy_fractional_registry(TOKEN)

        self.assertTrue(result.success)
        self.assertEqual(result.property_token_address, TOKEN)
        self.assertEqual(self.connection.deployments, [("0x6081", (TOKEN,))])
        self.assertEqual(
            self.service.list_deployed()[FRACTIONS],
            {"address": FRACTIONS, "type": "FractionalRegistry", "propertyTokenAddress": TOKEN},
        )

    async def test_invalid_property_token_address_is_rejected(self):
        result = await self.service.deploy_fractional_registry("0xnothex")

        self.assertFalse(result.success)
        self.assertEqual(result.error_kind, ErrorKind.INVALID_INPUT)
        self.assertEqual(self.connection.deployments, [])
        self.assertEqual(self.service.list_deployed(), {})

    async def test_missing_artifact_is_unavailable(self):
        service = MarketplaceService(self.connection)

        result = await service.deploy_tokenization_contract("Parcels", "PCL")

        self.assertFalse(result.success)
        self.assertEqual(result.error_kind, ErrorKind.UNAVAILABLE)
        self.assertEqual(self.connection.deployments, [])

    async def test_failed_deployment_records_nothing(self):
        self.connection.deploy_receipts.append(TransactionReverted("0xbad"))

        result = await self.service.deploy_tokenization_contract("Parcels", "PCL")

        self.assertFalse(result.success)
        self.assertEqual(result.error_kind, ErrorKind.NETWORK_OR_CONTRACT)
        self.assertEqual(len(self.service.registry), 0)
        self.assertEqual(len(self.service.contracts), 0)

    async def test_load_contract_registers_custom_entry(self):
        result = await self.service.load_contract(MARKET, [{"type": "function", "name": "foo"}])

        self.assertTrue(result.success)
        self.assertEqual(result.record.type, DeploymentType.CUSTOM)
        self.assertEqual(self.connection.binds[0][2], [{"type": "function", "name": "foo"}])
        self.assertEqual(result.to_dict()["record"], {"address": MARKET, "type": "Custom"})

    async def test_register_normalizes_known_deployment(self):
        record = self.service.register(
            DeployedContractRecord(address=MARKET, type=DeploymentType.TOKENIZATION_CONTRACT)
        )

        self.assertEqual(record.address, MARKET)
        self.assertEqual(self.service.registry.get(MARKET), record)


class ListingTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.connection = FakeConnection()
        self.service = MarketplaceService(self.connection, artifacts=ARTIFACTS)
        self.market = self.connection.handle(MARKET)

    async def test_list_for_sale(self):
        result = await self.service.list_for_sale(MARKET, 4, "1500000000000000000")

        self.assertTrue(result.success)
        self.assertEqual(result.price, "1500000000000000000")
        self.assertEqual(
            self.market.transactions,
            [("listProperty", (4, 1500000000000000000), 0)],
        )

    async def test_purchase_pays_price_times_shares(self):
        self.market.listing = {"seller": TOKEN, "price": 100, "shares": 10, "active": True}

        result = await self.service.purchase(MARKET, 5, 2)

        self.assertTrue(result.success)
        self.assertEqual(result.price, "200")
        self.assertEqual(result.shares, 2)
        self.assertEqual(self.market.calls, [("getPropertyListing", (5,))])
        self.assertEqual(self.market.transactions, [("purchaseProperty", (5, 2), 200)])

    async def test_purchase_accepts_tuple_listing(self):
        self.market.listing = (TOKEN, 250, 10, True)

        result = await self.service.purchase(MARKET, 5)

        self.assertEqual(result.price, "250")
        self.assertEqual(self.market.transactions, [("purchaseProperty", (5, 1), 250)])

    async def test_invalid_price_is_rejected(self):
        result = await self.service.list_for_sale(MARKET, 4, "cheap")

        self.assertEqual(result.error_kind, ErrorKind.INVALID_INPUT)
        self.assertEqual(self.market.transactions, [])

    async def test_malformed_marketplace_address_makes_no_network_calls(self):
        listed = await self.service.list_for_sale("0x" + "12" * 19, 4, 10)
        bought = await self.service.purchase("marketplace", 4, 2)

        for result in (listed, bought):
            self.assertFalse(result.success)
            self.assertEqual(result.error_kind, ErrorKind.INVALID_INPUT)
        self.assertEqual(self.connection.binds, [])
        self.assertEqual(self.market.calls, [])
        self.assertEqual(self.market.transactions, [])

    async def test_marketplace_handle_kind_is_enforced(self):
        await self.service.contracts.get_or_load(MARKET, ContractKind.ERC1155)

        result = await self.service.list_for_sale(MARKET, 4, 10)

        self.assertEqual(result.error_kind, ErrorKind.INVALID_INPUT)


if __name__ == "__main__":
    unittest.main()
