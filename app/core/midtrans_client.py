"""
Midtrans Core API client.

Responsibilities:
  - Charge a transaction (POST /v2/charge).
  - Check a transaction status by order id (GET /v2/{order_id}/status).

Requests and responses are plain dicts; the provider owns the schema and
handlers forward responses to the HTTP client verbatim.

Auth is HTTP basic with the server key as user name and an empty password.
"""

import logging
import threading
from typing import Callable

import requests
from requests import RequestException
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

logger = logging.getLogger(__name__)

BASE_URLS: dict[str, str] = {
    "sandbox": "https://api.sandbox.midtrans.com",
    "production": "https://api.midtrans.com",
}

# Midtrans answers "transaction expired" with status_code 407 on status
# checks; that is a status, not a failure.
NON_ERROR_STATUS_CODES = {"407"}


class PaymentGatewayError(Exception):
    """Transport failure or an error answer from Midtrans."""


def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RequestException),
    )


class MidtransClient:
    def __init__(
        self,
        server_key: str,
        environment: str = "sandbox",
        timeout: float = 10.0,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        if environment not in BASE_URLS:
            raise ValueError(f"Unknown Midtrans environment: {environment}")
        self.base_url = BASE_URLS[environment]
        self.timeout = timeout

        self._server_key = server_key
        self._session_factory = session_factory

        # requests.Session is not thread-safe; handlers run in a threadpool,
        # so each worker thread gets its own session (and connection pool).
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def http(self) -> requests.Session:
        """The calling thread's session, created on first use."""
        http = getattr(self._local, "http", None)
        if http is None:
            http = self._session_factory()
            http.auth = (self._server_key, "")
            http.headers.update(
                {"Accept": "application/json", "Content-Type": "application/json"}
            )
            self._local.http = http
            with self._lock:
                self._sessions.append(http)
        return http

    def charge(self, payload: dict) -> dict:
        """
        Create a transaction.

        Not retried: a repeated charge with the same order_id is rejected
        by Midtrans, so a retry after a lost response would turn into an error.
        """
        url = f"{self.base_url}/v2/charge"
        logger.info(f"Midtrans POST {url} order_id={payload.get('transaction_details', {}).get('order_id')}")

        try:
            resp = self.http.post(url, json=payload, timeout=self.timeout)
        except RequestException as e:
            raise PaymentGatewayError(f"charge failed: {e}") from e
        return self._parse(resp)

    def check(self, order_id: str) -> dict:
        """Fetch the current status of a transaction by order id."""
        url = f"{self.base_url}/v2/{order_id}/status"
        logger.info(f"Midtrans GET {url}")

        try:
            resp = self._get(url)
        except RequestException as e:
            raise PaymentGatewayError(f"status check failed: {e}") from e
        return self._parse(resp)

    @http_retry()
    def _get(self, url: str) -> requests.Response:
        return self.http.get(url, timeout=self.timeout)

    def _parse(self, resp: requests.Response) -> dict:
        """
        Decode a Midtrans answer.

        Midtrans reports most errors with HTTP 200 and a `status_code`
        field in the body, so both are checked.
        """
        try:
            body = resp.json()
        except ValueError as e:
            raise PaymentGatewayError(
                f"non-JSON response (HTTP {resp.status_code})"
            ) from e
        finally:
            resp.close()

        if resp.status_code >= 400:
            raise PaymentGatewayError(f"HTTP {resp.status_code}: {body}")
        if not isinstance(body, dict):
            raise PaymentGatewayError(f"unexpected response: {body!r}")

        status_code = str(body.get("status_code", "200"))
        try:
            failed = int(status_code) >= 400
        except ValueError:
            failed = False
        if failed and status_code not in NON_ERROR_STATUS_CODES:
            raise PaymentGatewayError(
                f"Midtrans status_code {status_code}: {body.get('status_message')}"
            )
        return body

    def close(self) -> None:
        """Close every per-thread session."""
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for http in sessions:
            http.close()
        self._local = threading.local()
