"""QR encoder stub implementation.

Returns deterministic fake PNG bytes instead of a real image, so export
tests do not need Pillow. The encoded payload is recoverable from the
output for assertions.

Testing Features:
- Records every (payload, options) pair encoded
- decode() returns the payload embedded in the fake image
"""

from __future__ import annotations

from src.application.ports.certificate_rendering import (
    QrEncoderProtocol,
    QrRenderOptions,
)

# PNG file signature, so consumers sniffing the format see an image
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_PAYLOAD_MARKER = b"stub-qr:"


class QrEncoderStub(QrEncoderProtocol):
    """In-memory stub implementation of QrEncoderProtocol.

    NOT suitable for production use.
    """

    def __init__(self) -> None:
        self.encoded: list[tuple[str, QrRenderOptions]] = []

    def encode(self, payload: str, options: QrRenderOptions) -> bytes:
        self.encoded.append((payload, options))
        return PNG_SIGNATURE + _PAYLOAD_MARKER + payload.encode("utf-8")

    # Testing helper methods

    @staticmethod
    def decode(image: bytes) -> str:
        """Recover the payload from bytes produced by encode().

        Raises:
            ValueError: If the bytes did not come from this stub.
        """
        prefix = PNG_SIGNATURE + _PAYLOAD_MARKER
        if not image.startswith(prefix):
            raise ValueError("not a stub QR image")
        return image[len(prefix) :].decode("utf-8")

    def clear(self) -> None:
        self.encoded.clear()
