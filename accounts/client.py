"""
Accounts API client.

Endpoints:
  POST   /v1/organisation/accounts                    – create (201)
  GET    /v1/organisation/accounts/{id}               – fetch (200)
  GET    /v1/organisation/accounts?page[number]=…     – list (200)
  DELETE /v1/organisation/accounts/{id}?version=N     – delete (204)

Create requests are validated locally before anything is sent. There is no
retry: transport failures and unexpected status codes are raised to the
caller as TransportError.
"""

from __future__ import annotations

import uuid
from email.utils import formatdate
from typing import Dict, Optional
from urllib.parse import quote

import requests

from accounts.codec import decode_multi_payload, decode_payload, encode_payload
from accounts.config import AccountsConfig
from accounts.errors import TransportError, UnexpectedStatusError
from accounts.resource import RESOURCE_TYPE, Data, MultiPayload, Payload, Resource
from accounts.validation import validate_resource
from utils.logger import logger

ACCOUNTS_PATH = "/v1/organisation/accounts"
CONTENT_TYPE = "application/vnd.api+json"
DEFAULT_PAGE_SIZE = 100


class AccountsClient:
    """Synchronous client for the organisation accounts resource."""

    def __init__(self, config: AccountsConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.organisation_id = config.organisation_id
        self.timeout = config.timeout

    # ------------------------------------------------------------------

    def _headers(self, body: Optional[bytes] = None) -> Dict[str, str]:
        headers = {
            "Accept": CONTENT_TYPE,
            "Date": formatdate(usegmt=True),
        }
        if body:
            headers["Content-Type"] = CONTENT_TYPE
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        expected_status: int,
        body: Optional[bytes] = None,
        params: Optional[dict] = None,
    ) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s params=%s", method, path, params)
        try:
            resp = requests.request(
                method,
                url,
                data=body,
                params=params,
                headers=self._headers(body),
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.warning("Accounts API timeout after %ss: %s %s", self.timeout, method, path)
            raise TransportError(f"{method} {path} timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            logger.warning("Accounts API connection error: %s %s: %s", method, path, exc)
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code != expected_status:
            detail = _extract_error(resp)
            logger.error("Accounts API %s %s – HTTP %d: %s", method, path, resp.status_code, detail)
            raise UnexpectedStatusError(method, path, resp.status_code, detail)

        logger.debug("Accounts API %s %s – HTTP %d", method, path, resp.status_code)
        return resp

    # ------------------------------------------------------------------

    def create(self, resource: Resource) -> Payload:
        """
        Validate the resource and create it as a new account.

        Raises ValidationError before any request is made if the resource
        breaks its country's rules.
        """
        validate_resource(resource)

        payload = Payload(
            data=Data(
                id=str(uuid.uuid4()),
                organisation_id=self.organisation_id,
                type=RESOURCE_TYPE,
                version=0,
                attributes=resource,
            )
        )
        resp = self._request("POST", ACCOUNTS_PATH, expected_status=201, body=encode_payload(payload))
        created = decode_payload(resp.content)
        logger.info("Account created: %s (%s)", created.data.id, resource.country)
        return created

    def fetch(self, account_id: str) -> Payload:
        resp = self._request("GET", f"{ACCOUNTS_PATH}/{quote(account_id, safe='')}", expected_status=200)
        return decode_payload(resp.content)

    def list(self, page_number: int = 0, page_size: int = DEFAULT_PAGE_SIZE) -> MultiPayload:
        """
        Fetch one page of accounts.

        The returned links are left for the caller to follow; no further
        pages are requested.
        """
        params = {"page[number]": page_number, "page[size]": page_size}
        resp = self._request("GET", ACCOUNTS_PATH, expected_status=200, params=params)
        return decode_multi_payload(resp.content)

    def delete(self, account_id: str, version: int) -> None:
        self._request(
            "DELETE",
            f"{ACCOUNTS_PATH}/{quote(account_id, safe='')}",
            expected_status=204,
            params={"version": version},
        )
        logger.info("Account deleted: %s (version %d)", account_id, version)


def _extract_error(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict):
        return str(body.get("error_message") or body.get("message") or body)
    return str(body)[:200]
