"""QR encoder adapter backed by the qrcode library.

Renders the verification payload as a PNG (Pillow image factory).
Version is chosen automatically: the payload carries a 64-character
fingerprint and a full URL, which never fits a version 1 symbol.
"""

from __future__ import annotations

import io

import qrcode
import qrcode.constants

from src.application.ports.certificate_rendering import (
    QrEncoderProtocol,
    QrRenderOptions,
)


class QrCodeEncoder(QrEncoderProtocol):
    """Encodes text payloads as PNG QR images."""

    def __init__(
        self, error_correction: int = qrcode.constants.ERROR_CORRECT_L
    ) -> None:
        self._error_correction = error_correction

    def encode(self, payload: str, options: QrRenderOptions) -> bytes:
        """Encode a payload as a PNG QR image.

        Args:
            payload: Exact text to encode.
            options: Module size, quiet zone and colors.

        Returns:
            PNG bytes.
        """
        qr = qrcode.QRCode(
            version=None,
            error_correction=self._error_correction,
            box_size=options.box_size,
            border=options.border,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        img = qr.make_image(fill_color=options.fill_color, back_color=options.back_color)
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()
