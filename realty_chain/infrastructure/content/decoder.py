from __future__ import annotations

from multiformats import CID, multicodec

from ...domain.shared.errors import ContentDecodeError
from ...domain.shared.models import ContentPointer

# multicodec namespace code -> URI scheme of the decoded pointer
NAMESPACES = {
    0xE3: "ipfs",
    0xE5: "ipns",
    0xE4: "bzz",
}


class ContentHashDecoder:
    """Decodes ENS ``contenthash`` values (EIP-1577) into content pointers."""

    def decode(self, raw: bytes) -> ContentPointer:
        if not raw:
            raise ContentDecodeError("Empty content hash")
        try:
            codec, payload = multicodec.unwrap(bytes(raw))
        except Exception as exc:
            raise ContentDecodeError(f"Unknown content hash codec: {exc}") from exc

        protocol = NAMESPACES.get(codec.code)
        if protocol is None:
            raise ContentDecodeError(f"Unsupported content hash namespace {codec.name!r}")
        try:
            cid = CID.decode(bytes(payload))
        except Exception as exc:
            raise ContentDecodeError(f"Invalid {codec.name} content identifier: {exc}") from exc
        return ContentPointer(protocol=protocol, decoded=str(cid), raw="0x" + bytes(raw).hex())
