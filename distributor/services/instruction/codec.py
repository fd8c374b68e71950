"""
Instruction payload codec.

Fixed 10-byte layout:
    offset 0, 8 bytes: gross amount in lamports (u64, little-endian)
    offset 8, 1 byte:  has_first_referrer (0 = false, nonzero = true)
    offset 9, 1 byte:  has_second_referrer (0 = false, nonzero = true)
"""

from borsh_construct import U8, U64, CStruct

from distributor.config.constants import PAYLOAD_SIZE
from distributor.models.distribution import PaymentRequest
from distributor.utils.exceptions import DecodeError


PaymentRequestLayout = CStruct(
    "gross_amount" / U64,
    "has_first_referrer" / U8,
    "has_second_referrer" / U8,
)


def encode_payment_request(request: PaymentRequest) -> bytes:
    """
    Encode a payment request into the 10-byte wire payload.

    Flags are always written as 0 or 1.

    Example:
        >>> encode_payment_request(PaymentRequest(gross_amount=1, has_first_referrer=True)).hex()
        '01000000000000000100'
    """
    return PaymentRequestLayout.build(
        {
            "gross_amount": request.gross_amount,
            "has_first_referrer": int(request.has_first_referrer),
            "has_second_referrer": int(request.has_second_referrer),
        }
    )


def decode_payment_request(data: bytes) -> PaymentRequest:
    """
    Decode the 10-byte wire payload.

    Args:
        data: Raw instruction data

    Returns:
        PaymentRequest

    Raises:
        DecodeError: If the payload is not exactly 10 bytes
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"Instruction data must be bytes, got {type(data).__name__}")

    data = bytes(data)
    if len(data) != PAYLOAD_SIZE:
        raise DecodeError(
            f"Instruction data must be exactly {PAYLOAD_SIZE} bytes, got {len(data)}"
        )

    parsed = PaymentRequestLayout.parse(data)
    return PaymentRequest(
        gross_amount=parsed.gross_amount,
        has_first_referrer=parsed.has_first_referrer != 0,
        has_second_referrer=parsed.has_second_referrer != 0,
    )
