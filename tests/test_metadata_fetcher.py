import unittest

from realty_chain.domain.shared import MetadataFetchError
from realty_chain.infrastructure.metadata import HttpMetadataFetcher


class AllowedUrlTests(unittest.TestCase):
    def test_any_http_host_when_unrestricted(self):
        fetcher = HttpMetadataFetcher()

        self.assertTrue(fetcher.is_allowed_url("https://meta.example/1.json"))
        self.assertTrue(fetcher.is_allowed_url("http://127.0.0.1:8080/1.json"))
        self.assertFalse(fetcher.is_allowed_url("ipfs://QmDoc"))
        self.assertFalse(fetcher.is_allowed_url("https:///1.json"))
        self.assertFalse(fetcher.is_allowed_url(""))

    def test_allowed_hosts_are_case_insensitive(self):
        fetcher = HttpMetadataFetcher(allowed_hosts={"Meta.Example"})

        self.assertTrue(fetcher.is_allowed_url("https://META.example/1.json"))
        self.assertFalse(fetcher.is_allowed_url("https://evil.example/1.json"))


class FetchJsonTests(unittest.IsolatedAsyncioTestCase):
    async def test_disallowed_url_raises_without_session(self):
        fetcher = HttpMetadataFetcher(allowed_hosts={"meta.example"})

        with self.assertRaisesRegex(MetadataFetchError, "not allowed"):
            await fetcher.fetch_json("https://evil.example/1.json")

        self.assertIsNone(fetcher._session)
        await fetcher.close()


if __name__ == "__main__":
    unittest.main()
