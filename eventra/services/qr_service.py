"""
QR code generation for event share links
"""

import io
import qrcode

from eventra.core.config import settings

class QRService:
    """Service for generating QR codes"""

    @staticmethod
    def get_share_url(event_id: int) -> str:
        """Public share page the QR code points at"""
        return f"{settings.BASE_URL}/events/share/{event_id}"

    @staticmethod
    def get_public_api_url(event_id: int) -> str:
        """JSON endpoint the share page reads the event from"""
        return f"{settings.BASE_URL}/api/events/shared/{event_id}"

    @staticmethod
    def generate_event_qr(event_id: int, format: str = 'PNG') -> bytes:
        """Render the share link of an event as an image"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(QRService.get_share_url(event_id))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format=format)
        return buffer.getvalue()
