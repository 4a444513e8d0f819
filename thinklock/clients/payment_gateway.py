# ==============================================================================
# PAYMENT GATEWAY - Stripe REST Client
# ==============================================================================
# Creates and retrieves payment intents over the Stripe HTTP API
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from thinklock.core.exceptions import ServiceUnavailableError
from thinklock.core.settings import settings

logger = logging.getLogger(__name__)

SERVICE_NAME = "stripe"


class PaymentGateway:
    """
    Thin async client for Stripe payment intents.

    The HTTP client is created lazily and reused across requests.
    Provider failures surface as ``ServiceUnavailableError`` (502).

    Example:
        >>> gateway = PaymentGateway()
        >>> intent = await gateway.create_intent(2500, "usd", {"student_id": "s1"})
        >>> intent["client_secret"]
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            secret_key: Stripe secret key (defaults to settings)
            base_url: Stripe API base URL (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            transport: Custom httpx transport, used by tests
        """
        self._secret_key = secret_key if secret_key is not None else settings.STRIPE_SECRET_KEY
        self._base_url = base_url or settings.STRIPE_API_BASE
        self._timeout = timeout or settings.EXTERNAL_TIMEOUT_SECONDS
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Authorization": f"Bearer {self._secret_key}"},
                timeout=httpx.Timeout(self._timeout, connect=5.0),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._get_client().request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Stripe request {method} {path} failed: {e}")
            raise ServiceUnavailableError(
                message="Payment provider unreachable",
                service_name=SERVICE_NAME,
            )

    @staticmethod
    def _provider_error(response: httpx.Response) -> ServiceUnavailableError:
        try:
            error = response.json().get("error", {})
        except ValueError:
            error = {}
        logger.error(
            f"Stripe responded {response.status_code}: {error.get('message', response.text)}"
        )
        return ServiceUnavailableError(
            message=error.get("message") or "Payment provider error",
            service_name=SERVICE_NAME,
            details={"provider_status": response.status_code},
        )

    async def create_intent(
        self,
        amount: int,
        currency: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Create a card payment intent.

        Args:
            amount: Amount in minor currency units
            currency: ISO currency code
            metadata: Key/value pairs stored on the intent

        Returns:
            Stripe payment intent object

        Raises:
            ServiceUnavailableError: If the provider fails
        """
        form: Dict[str, Any] = {
            "amount": str(amount),
            "currency": currency,
            "payment_method_types[]": "card",
        }
        for key, value in (metadata or {}).items():
            form[f"metadata[{key}]"] = value

        response = await self._request("POST", "/payment_intents", data=form)
        if response.is_error:
            raise self._provider_error(response)
        return response.json()

    async def retrieve_intent(self, intent_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a payment intent.

        Returns:
            Stripe payment intent object, or None when the provider has no such intent

        Raises:
            ServiceUnavailableError: If the provider fails
        """
        response = await self._request("GET", f"/payment_intents/{intent_id}")
        if response.status_code == 404:
            return None
        if response.is_error:
            raise self._provider_error(response)
        return response.json()
