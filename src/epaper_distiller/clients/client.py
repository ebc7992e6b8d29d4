"""Base client for the JSON APIs behind the ePaper web application."""

import json
import logging
from abc import ABC, abstractmethod
from time import sleep
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

# Retried; every error status is raised on the first response.
TRANSIENT_ERRORS = (httpx.ConnectError, httpx.TimeoutException)


class Client(ABC):
    """Base class for clients of a JSON API with an authorized session.

    The httpx transport is created on first use and closed with the
    context manager. Requests that fail in transport are retried; error
    statuses are mapped to exceptions at once. Responses are decoded into
    pydantic records, binary assets are returned as bytes.

    Config keys:
        base_url (required): Base URL for all requests
        timeout: Request timeout in seconds (default: 30)
        retry_attempts: Attempts per request on transport failures (default: 3)
        retry_delay: Delay between attempts in seconds (default: 1)
        headers: Headers sent with every request
    """

    def __init__(self, config: dict):
        if "base_url" not in config:
            raise ValueError("config must include 'base_url'")

        self._config = dict(config)
        self._headers = dict(config.get("headers", {}))
        self._client: httpx.Client | None = None

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"])

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def retry_attempts(self) -> int:
        return max(1, int(self._config.get("retry_attempts", 3)))

    @property
    def retry_delay(self) -> float:
        return float(self._config.get("retry_delay", 1))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def authorized(self) -> bool:
        return "Authorization" in self._headers

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized httpx client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
        return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def authorize(self, authorization: str) -> None:
        """Send ``authorization`` as the Authorization header from now on."""
        self._headers["Authorization"] = authorization
        if self._client is not None:
            self._client.headers["Authorization"] = authorization

    def _check_status(self, response: httpx.Response) -> httpx.Response:
        """Return ``response`` if it succeeded.

        Raises:
            NotFoundError: For 404 responses
            RateLimitError: For 429 responses
            APIError: For other non-2xx responses
        """
        if response.is_success:
            return response

        status_code = response.status_code
        if status_code == 404:
            raise NotFoundError(str(response.url))
        if status_code == 429:
            raise RateLimitError(str(response.url))
        raise APIError(
            f"API error {status_code}: {response.url}",
            status_code=status_code,
            url=str(response.url),
        )

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send a request, retrying transport failures.

        Args:
            method: HTTP method
            path: URL path below base_url
            **kwargs: Passed on to httpx

        Raises:
            ConnectionError: If every attempt failed in transport
            APIError: If the server answered with an error status
        """
        last_exception: Exception | None = None
        attempts = self.retry_attempts

        for attempt in range(1, attempts + 1):
            try:
                response = self.client.request(method, path, **kwargs)
            except TRANSIENT_ERRORS as e:
                last_exception = e
                logger.warning(f"{method} {path} failed (attempt {attempt}/{attempts}): {e}")
                if attempt < attempts:
                    sleep(self.retry_delay)
                continue
            return self._check_status(response)

        raise ConnectionError(
            f"Connection failed after {attempts} attempts"
        ) from last_exception

    def get(self, path: str, **kwargs) -> httpx.Response:
        return self._send("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> httpx.Response:
        return self._send("POST", path, **kwargs)

    def get_json(self, path: str) -> Any:
        """GET ``path`` and parse the body as JSON.

        Raises:
            ValidationError: If the body is not JSON
        """
        return self._parse_json(self.get(path))

    def post_json(self, path: str, body: BaseModel) -> Any:
        """POST ``body`` as JSON and parse the JSON answer."""
        return self._parse_json(self.post(path, json=body.model_dump()))

    def get_record(self, model: type[RecordT], path: str, resource: str) -> RecordT:
        """GET ``path`` and decode it into ``model``.

        Args:
            model: Record type to decode into
            path: URL path below base_url
            resource: Name of the resource for error messages

        Raises:
            ValidationError: If the body is not JSON or does not fit ``model``
        """
        return self.decode(model, self.get_json(path), resource)

    def get_bytes(self, path: str) -> bytes:
        """GET a binary asset. A missing asset yields ``b""``."""
        try:
            response = self.get(path)
        except NotFoundError as e:
            logger.debug(f"Asset unavailable: {e.message}")
            return b""
        return response.content

    @staticmethod
    def decode(model: type[RecordT], data: Any, resource: str) -> RecordT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Could not decode {resource}",
                errors=[str(err) for err in e.errors()],
            ) from e

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError(
                f"Response from {response.url} is not valid JSON",
                errors=[str(e)],
            ) from e

    @abstractmethod
    def fetch(self, *args, **kwargs) -> Any:
        """Fetch the main record of the API. Must be implemented by subclasses."""
        pass
