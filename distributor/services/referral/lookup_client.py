"""
Referral lookup client.

HTTP client for the referral service that maps a referral code (or a
wallet) to the wallet of its referrer.
"""

from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import quote

import aiohttp
from loguru import logger

from distributor.config.constants import REFERRAL_LOOKUP_TIMEOUT, REFERRER_LOOKUP_PATH
from distributor.utils.exceptions import ReferralLookupError
from distributor.utils.security import mask_referral_code


@dataclass
class LookupResult:
    """Response of a single referrer lookup."""

    success: bool
    referrer_wallet: str | None = None
    message: str | None = None


class ReferralLookup(Protocol):
    """Anything that can resolve a code to its referrer wallet."""

    async def lookup(self, code: str) -> LookupResult: ...


def parse_lookup_response(data: Any) -> LookupResult:
    """
    Validate the JSON body returned by the referral service.

    Expected shape: ``{"success": bool, "referrerWallet": str?, "message": str?}``

    Raises:
        ReferralLookupError: If the body does not have the expected shape
    """
    if not isinstance(data, dict):
        raise ReferralLookupError("Malformed referral response: expected a JSON object")

    success = data.get("success")
    if not isinstance(success, bool):
        raise ReferralLookupError("Malformed referral response: 'success' must be a boolean")

    wallet = data.get("referrerWallet")
    if wallet is not None and not isinstance(wallet, str):
        raise ReferralLookupError("Malformed referral response: 'referrerWallet' must be a string")

    message = data.get("message")
    if message is not None and not isinstance(message, str):
        message = str(message)

    if success and not wallet:
        raise ReferralLookupError("Malformed referral response: success without 'referrerWallet'")

    return LookupResult(success=success, referrer_wallet=wallet, message=message)


class ReferralLookupClient:
    """
    aiohttp client for the referral lookup service.

    Each call is a single GET without retries; every transport or format
    problem surfaces as ReferralLookupError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = REFERRAL_LOOKUP_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize referral lookup client.

        Args:
            base_url: Service root, e.g. https://example.com
            timeout: Total timeout per request in seconds
            session: Optional externally managed session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "ReferralLookupClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def url_for(self, code: str) -> str:
        """Build the lookup URL for a code, escaping it as one path segment."""
        return self.base_url + REFERRER_LOOKUP_PATH.format(code=quote(code, safe=""))

    async def lookup(self, code: str) -> LookupResult:
        """
        Look up the referrer wallet for a code.

        Args:
            code: Referral code or wallet address

        Returns:
            LookupResult; ``success=False`` when the service reports no referrer

        Raises:
            ReferralLookupError: On network errors, timeouts, unexpected HTTP
                status or a malformed body
        """
        url = self.url_for(code)
        try:
            session = await self._get_session()
            async with session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"Accept": "application/json"},
            ) as response:
                if response.status == 404:
                    logger.debug(f"Referral code {mask_referral_code(code)} not found")
                    return LookupResult(success=False, message="Referrer not found")
                if response.status != 200:
                    raise ReferralLookupError(
                        f"Referral service returned HTTP {response.status}"
                    )
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as e:
            raise ReferralLookupError(f"Referral lookup request failed: {e!r}") from e
        except ValueError as e:
            raise ReferralLookupError("Malformed referral response: invalid JSON") from e

        return parse_lookup_response(data)
