"""
Completion endpoint client for catalog-enrich.

Sends schema-constrained requests to an OpenAI-compatible completion API and
decodes the answers into categories and product parameters.
"""

import logging

import httpx

from .config import LLMConfig
from .errors import TransportError
from .models import ProductParameter, Task
from .parser import parse_response
from .prompts import CompletionRequest, build_request

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class CompletionClient:
    """
    Stateless HTTP transport for completion requests.

    Each send opens its own connection and closes it before returning,
    whether the call succeeds, fails, or is cancelled.
    """

    def __init__(
        self,
        timeout_seconds: float | None = None,
        api_key: str | None = None,
    ):
        """
        Initialize the completion client.

        Args:
            timeout_seconds: Request timeout; None keeps the httpx default
            api_key: Sent as a bearer token when set
        """
        self.timeout = timeout_seconds
        self.api_key = api_key

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": JSON_CONTENT_TYPE}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def send(self, endpoint_url: str, request: CompletionRequest) -> str:
        """
        POST a completion request and return the raw response body.

        Raises:
            TransportError: non-2xx status or network failure
        """
        body = request.to_json().encode("utf-8")
        client_kwargs = {}
        if self.timeout is not None:
            client_kwargs["timeout"] = self.timeout

        logger.debug(f"POST {endpoint_url} model={request.model} ({len(body)} bytes)")

        async with httpx.AsyncClient(**client_kwargs) as client:
            try:
                response = await client.post(
                    endpoint_url,
                    content=body,
                    headers=self._headers(),
                )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.warning(f"Transport error calling {endpoint_url}: {e!r}")
                raise TransportError(f"Request to {endpoint_url} failed: {e}") from e

            if not 200 <= response.status_code < 300:
                logger.warning(f"HTTP {response.status_code} from {endpoint_url}")
                raise TransportError(
                    f"Error: HTTP {response.status_code}",
                    status_code=response.status_code,
                )

            return response.text


class CatalogModelClient:
    """
    Asks a language model to classify and parameterize product descriptions.

    `model_id` and `endpoint_url` may be changed between calls; each call
    reads them once and keeps no other state.
    """

    def __init__(
        self,
        model_id: str,
        endpoint_url: str,
        transport: CompletionClient | None = None,
    ):
        self.model_id = model_id
        self.endpoint_url = endpoint_url
        self.transport = transport or CompletionClient()

    @classmethod
    def from_config(cls, config: LLMConfig) -> "CatalogModelClient":
        """Create a client from LLM configuration."""
        transport = CompletionClient(
            timeout_seconds=config.timeout_seconds,
            api_key=config.get_api_key(),
        )
        return cls(config.model, config.endpoint_url, transport=transport)

    async def complete(self, task: Task, text: str) -> str | list[ProductParameter]:
        """Run build, send and parse once for a task."""
        request = build_request(task, self.model_id, text)
        raw_body = await self.transport.send(self.endpoint_url, request)
        return parse_response(task, raw_body)

    async def classify(self, text: str) -> str:
        """
        Get a product category for a description.

        Args:
            text: Free-text product description

        Returns:
            Category string exactly as the model returned it
        """
        return await self.complete(Task.CLASSIFY, text)

    async def parameterize(self, text: str) -> list[ProductParameter]:
        """
        Get the main parameters of a product from its description.

        Args:
            text: Free-text description of the product and its parameters

        Returns:
            Parameters in the order the model listed them
        """
        return await self.complete(Task.PARAMETERIZE, text)
