from typing import Any, Dict, Optional

import httpx
from loguru import logger

from paystack_relay.config import Settings
from paystack_relay.core.exceptions.PaymentException import PaymentGatewayException


class PaystackClient:
    """
    Thin async wrapper over the Paystack REST API.

    Every call is a single round trip with a bounded timeout. Failures of any
    kind surface as PaymentGatewayException carrying `failure_message`; the
    exception's `error` is Paystack's own message when the response had one.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.PAYSTACK_BASE_URL.rstrip("/")
        self.timeout = settings.PAYSTACK_TIMEOUT
        self.transport = transport
        self.headers = {
            "Authorization": f"Bearer {settings.PAYSTACK_SECRET_KEY}",
            "Content-Type": "application/json"
        }

    async def get(self, path: str, failure_message: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._request("GET", path, failure_message, params=params)

    async def post(self, path: str, failure_message: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", path, failure_message, json=payload)

    async def _request(self, method: str, path: str, failure_message: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.info(f"Paystack request: {method} {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, headers=self.headers, **kwargs)
                response.raise_for_status()
                result = response.json()

        except httpx.TimeoutException:
            logger.error(f"{failure_message}: Paystack request timeout")
            raise PaymentGatewayException(failure_message, "Paystack request timed out")
        except httpx.HTTPStatusError as e:
            error = self._extract_error(e.response) or str(e)
            logger.error(f"{failure_message}: status={e.response.status_code}, body={e.response.text}")
            raise PaymentGatewayException(failure_message, error)
        except httpx.RequestError as e:
            logger.error(f"{failure_message}: network error {e}")
            raise PaymentGatewayException(failure_message, f"Network error: {e}")
        except ValueError:
            logger.error(f"{failure_message}: response body is not JSON")
            raise PaymentGatewayException(failure_message, "Malformed response from Paystack")

        if not isinstance(result, dict):
            logger.error(f"{failure_message}: unexpected response shape {type(result).__name__}")
            raise PaymentGatewayException(failure_message, "Malformed response from Paystack")

        logger.debug(f"Paystack response: status={response.status_code}, message={result.get('message')}")
        return result

    @staticmethod
    def _extract_error(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return None
