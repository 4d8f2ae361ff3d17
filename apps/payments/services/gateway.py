"""
PayOS gateway wrapper.

All calls to the payos SDK go through this module so the rest of the code
(and the tests) deal with plain dicts and GatewayError only.

Note:
    Requires the ``payos`` library. Credentials come from the PAYOS_*
    settings.
"""

import logging
from io import BytesIO

from django.conf import settings

from .exceptions import GatewayError


logger = logging.getLogger(__name__)

SUCCESS_CODE = '00'


def get_client():
    """Build a PayOS client from settings."""
    from payos import PayOS

    if not (settings.PAYOS_CLIENT_ID and settings.PAYOS_API_KEY and settings.PAYOS_CHECKSUM_KEY):
        raise GatewayError("PayOS credentials are not configured")

    return PayOS(
        client_id=settings.PAYOS_CLIENT_ID,
        api_key=settings.PAYOS_API_KEY,
        checksum_key=settings.PAYOS_CHECKSUM_KEY,
    )


def create_payment_link(*, order_code: int, amount: int, description: str) -> dict:
    """
    Ask PayOS for a checkout link.

    Returns:
        dict: Gateway response (checkoutUrl, qrCode, paymentLinkId, ...)

    Raises:
        GatewayError: If the gateway call fails
    """
    from payos import PaymentData

    payment_data = PaymentData(
        orderCode=order_code,
        amount=amount,
        description=description,
        returnUrl=settings.PAYOS_RETURN_URL,
        cancelUrl=settings.PAYOS_CANCEL_URL,
    )
    try:
        result = get_client().createPaymentLink(paymentData=payment_data)
    except GatewayError:
        raise
    except Exception as e:
        raise GatewayError(f"Failed to create payment link: {e}") from e

    return dict(vars(result))


def verify_webhook(body: dict) -> dict:
    """
    Verify a webhook body signature and return its payment data.

    Raises:
        GatewayError: If the signature is invalid or the body malformed
    """
    try:
        data = get_client().verifyPaymentWebhookData(body)
    except GatewayError:
        raise
    except Exception as e:
        raise GatewayError(f"Invalid webhook payload: {e}") from e

    return dict(vars(data))


def render_qr_png(payload: str) -> bytes:
    """
    Render a VietQR payload as PNG bytes.

    Uses error correction level M, like the bank QR codes printed on
    the pay page.
    """
    import qrcode

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()
