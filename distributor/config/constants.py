"""
Application constants.

Centralized constants for the instruction wire format, account layout
and referral lookup service.
"""

from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID

# ========================================================================
# INSTRUCTION WIRE FORMAT
# ========================================================================

# [amount u64 LE (8 bytes)][has_first_referrer (1 byte)][has_second_referrer (1 byte)]
PAYLOAD_SIZE = 10

# ========================================================================
# ACCOUNT LIST LAYOUT
# ========================================================================

ACCOUNT_COUNT = 6
PAYER_INDEX = 0
TREASURY_INDEX = 1
TEAM_INDEX = 2
FIRST_REFERRER_INDEX = 3
SECOND_REFERRER_INDEX = 4
SYSTEM_PROGRAM_INDEX = 5

NATIVE_SYSTEM_PROGRAM_ID: Pubkey = SYSTEM_PROGRAM_ID

# ========================================================================
# REFERRAL LOOKUP SERVICE
# ========================================================================

REFERRER_LOOKUP_PATH = "/api/whitelist/get-referrer/{code}"
REFERRAL_LOOKUP_TIMEOUT = 10.0  # seconds, per lookup
MAX_REFERRAL_CODE_LENGTH = 128
