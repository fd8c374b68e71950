"""
Instruction package.

- codec: 10-byte payload encoding and decoding
- accounts: 6-slot account list encoding and validation
- builder: client-side instruction assembly with referral resolution
"""

from distributor.services.instruction.accounts import (
    account_infos_from_metas,
    build_account_metas,
    parse_account_list,
)
from distributor.services.instruction.builder import (
    InstructionBuilder,
    build_instruction,
    create_payment_distribution_instruction,
)
from distributor.services.instruction.codec import (
    PaymentRequestLayout,
    decode_payment_request,
    encode_payment_request,
)

__all__ = [
    "InstructionBuilder",
    "PaymentRequestLayout",
    "account_infos_from_metas",
    "build_account_metas",
    "build_instruction",
    "create_payment_distribution_instruction",
    "decode_payment_request",
    "encode_payment_request",
    "parse_account_list",
]
