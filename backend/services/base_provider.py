import logging
from typing import Any, Optional

import httpx

from core.errors import ProviderError, ProviderTimeout

logger = logging.getLogger(__name__)


def extract_error_message(response: httpx.Response) -> str:
    """Pull a readable message out of a vendor error body"""
    fallback = f"API request failed: {response.status_code}"
    if not response.content:
        return fallback
    try:
        error_data = response.json()
    except ValueError:
        return response.text[:200] or fallback

    if not isinstance(error_data, dict):
        return fallback

    error = error_data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str):
        return error

    # Stability style: {"name": ..., "errors": [...]}
    errors = error_data.get("errors")
    if isinstance(errors, list) and errors:
        return "; ".join(str(e) for e in errors)

    return error_data.get("message") or fallback


class ProviderService:
    """Shared HTTP plumbing for the external providers."""

    name = "provider"
    label = "Provider"

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self, **extra: str) -> dict:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        headers.update(extra)
        return headers

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.post(url, timeout=self.timeout, **kwargs)
        except httpx.TimeoutException:
            logger.error("%s request to %s timed out", self.name, path)
            raise ProviderTimeout(self.label, self.timeout)
        except httpx.RequestError as error:
            logger.error("%s request to %s failed: %s", self.name, path, error)
            raise ProviderError(self.name, f"Error calling {self.label} API: {error}")

        if not response.is_success:
            message = extract_error_message(response)
            logger.error("%s returned %s: %s", self.name, response.status_code, message)
            raise ProviderError(
                self.name,
                f"{self.label} API error ({response.status_code}): {message}",
                status=response.status_code,
            )
        return response

    def _json(self, response: httpx.Response) -> dict:
        """Decode a successful response body, ProviderError unless it is a JSON object"""
        try:
            data = response.json()
        except ValueError:
            raise ProviderError(self.name, f"{self.label} returned a non-JSON response")
        if not isinstance(data, dict):
            raise ProviderError(self.name, f"{self.label} returned an unexpected response")
        return data

    async def aclose(self) -> None:
        await self.client.aclose()
