"""HTTP transport for the Enterprise Search API built on requests."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from . import __version__
from .config import Configuration
from .errors import STATUS_ERRORS, ConfigurationError, TransportError, UnexpectedHTTPException
from .logging import get_logger

USER_AGENT = f"swiftype-enterprise-python/{__version__}"


class Transport:
    """Thin authenticated JSON transport with timeouts and logging.

    Every non-2xx response is raised as a TransportError subclass matching
    the status code; connection failures and timeouts are raised as
    TransportError.
    """

    def __init__(self, config: Configuration, *, session: Optional[requests.Session] = None) -> None:
        if not config.access_token:
            raise ConfigurationError("an access token is required")
        self.config = config
        self.base = config.endpoint if config.endpoint.endswith("/") else f"{config.endpoint}/"
        self.timeout = (config.open_timeout, config.overall_timeout)
        self.log = get_logger("transport")
        self.s = session if session is not None else requests.Session()
        self.s.headers.update({
            "Authorization": f"Bearer {config.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        })

    # ---------- helpers ----------
    def _url(self, path: str) -> str:
        return f"{self.base}{path.lstrip('/')}"

    def _json(self, r: requests.Response) -> Any:
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise TransportError(
                f"invalid JSON in response from {r.url}: {e}", status_code=r.status_code, response=r
            ) from e

    def _raise_for_status(self, method: str, r: requests.Response) -> None:
        if 200 <= r.status_code < 300:
            return
        detail = _error_detail(r)
        message = f"{method} {r.url} failed with HTTP {r.status_code}"
        if detail:
            message = f"{message}: {detail}"
        self.log.error(message)
        exc_type = STATUS_ERRORS.get(r.status_code, UnexpectedHTTPException)
        raise exc_type(message, status_code=r.status_code, response=r)

    # ---------- verbs ----------
    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        url = self._url(path)
        self.log.debug(f"{method} {url} params={params!r}")
        try:
            r = self.s.request(
                method,
                url,
                params=params,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            self.log.error(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e
        self._raise_for_status(method, r)
        return self._json(r)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> Any:
        return self.request("POST", path, body=body)

    def put(self, path: str, body: Any = None) -> Any:
        return self.request("PUT", path, body=body)

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("DELETE", path, params=params)

    def close(self) -> None:
        self.s.close()


def _error_detail(r: requests.Response) -> str:
    try:
        data = r.json()
    except ValueError:
        return (r.text or "")[:500]
    if isinstance(data, dict):
        errors = data.get("errors") or data.get("error")
        if isinstance(errors, list):
            return ", ".join(str(e) for e in errors)
        if errors:
            return str(errors)
    return (r.text or "")[:500]
