"""
HTTP client side of the PCI vault.

Each operation is one synchronous JSON request through the injected
httpx.Client: no retry, no idempotency key, timeouts as configured on the
client. Outbound URL and body and the inbound body are logged only after
PAN values have been masked.
"""

import json
from typing import Any

import httpx

from paystore.config import config
from paystore.context import Context
from paystore.errors import UnsupportedOperationError, VaultError
from paystore.logs import LoggerFunc, default_logger
from paystore.repository import Repository, T
from paystore.security import mask_params

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def make_vault_client(timeout: float = None) -> httpx.Client:
    return httpx.Client(timeout=timeout or config.vault_timeout)


class VaultHttpStore(Repository[T]):
    """Base for vault-backed repositories; subclasses implement the verbs."""

    def __init__(
        self,
        url: str = None,
        client: httpx.Client = None,
        logger: LoggerFunc = None,
    ):
        self.url = (url or config.vault_url).rstrip("/")
        self.client = client or make_vault_client()
        self.logger = logger or default_logger

    def request(
        self,
        ctx: Context,
        method: str,
        uri: str,
        params: dict[str, Any] = None,
        body: dict[str, Any] = None,
    ) -> tuple[dict[str, Any], int]:
        """
        Send one request and decode the JSON object it returns.

        Returns:
            (decoded body, HTTP status code); the body is empty on a 404

        Raises:
            VaultError: transport failure or a body that is not a JSON object
        """
        data = json.dumps(body) if body is not None else ""
        content_type = JSON_CONTENT_TYPE if body is not None else FORM_CONTENT_TYPE
        request = self.client.build_request(
            method,
            f"{self.url}/{uri}",
            params=params,
            content=data,
            headers={"Content-Type": content_type},
        )

        log = self.logger(ctx)
        log.info("vault request", method=method, url=mask_params(str(request.url)))
        log.info("vault request params", params=mask_params(data))

        try:
            response = self.client.send(request)
        except httpx.HTTPError as exc:
            raise VaultError(f"can not do request: {exc}") from exc

        log.info(
            "vault response",
            status=response.status_code,
            body=mask_params(response.text),
        )

        if response.status_code == httpx.codes.NOT_FOUND:
            return {}, response.status_code

        try:
            payload = response.json()
        except ValueError as exc:
            raise VaultError(
                f"can not unmarshal body: {exc}", status_code=response.status_code
            ) from exc

        if not isinstance(payload, dict):
            raise VaultError(
                "response body is not a JSON object", status_code=response.status_code
            )
        return payload, response.status_code

    def unsupported(self, operation: str):
        return UnsupportedOperationError(
            f"{self.entity} {operation} is not offered by the vault"
        )
