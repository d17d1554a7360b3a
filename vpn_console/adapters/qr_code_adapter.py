"""QR code generator adapter."""

import io
import qrcode


class QRCodeAdapter:
    """Renders client configurations as scannable PNG codes."""

    def __init__(self, box_size: int = 8, border: int = 4):
        self.box_size = box_size
        self.border = border

    def generate(self, data: str) -> bytes:
        """Generate QR code PNG from text."""
        qr = qrcode.QRCode(
            version=None,
            box_size=self.box_size,
            border=self.border,
            error_correction=qrcode.constants.ERROR_CORRECT_M
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buf = io.BytesIO()
        img.save(buf, format='PNG')
        return buf.getvalue()
