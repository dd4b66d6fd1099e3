"""HTTP client for the remote template store.

Wraps the `/templates` endpoints of a Postmark-style server API. Every call
is a blocking request; callers issue them one at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..config import DEFAULT_SETTINGS
from ..errors import ApiError

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Postmark-Server-Token"


@dataclass
class ServerAuth:
    token: str


class TemplatesClient:
    """Client for listing, reading and mutating templates on one server."""

    def __init__(
        self,
        auth: ServerAuth,
        api_url: str = DEFAULT_SETTINGS["api_url"],
        timeout: float = DEFAULT_SETTINGS["timeout"],
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.api_url}{path}"
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": "mailtmpl",
            TOKEN_HEADER: self.auth.token,
        }
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ApiError(f"Request to {url} failed: {exc}") from exc

        if resp.status_code >= 300:
            raise _error_from_response(resp, path)
        if not resp.content:
            return {}
        try:
            body = resp.json()
        except ValueError as exc:
            raise ApiError(
                f"Invalid JSON from {path}: {resp.text[:200]}",
                status_code=resp.status_code,
            ) from exc
        if not isinstance(body, dict):
            raise ApiError(
                f"Unexpected response from {path}: expected an object",
                status_code=resp.status_code,
            )
        return body

    def list_templates(
        self,
        count: int = DEFAULT_SETTINGS["page_size"],
        offset: int = 0,
        template_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Return one page of template summaries: `{TotalCount, Templates}`."""
        params: Dict[str, Any] = {"count": count, "offset": offset}
        if template_type:
            params["templateType"] = template_type
        return self._request("GET", "/templates", params=params)

    def get_template(self, id_or_alias: Any) -> Dict[str, Any]:
        return self._request("GET", f"/templates/{id_or_alias}")

    def create_template(self, template: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/templates", json=template)

    def edit_template(self, id_or_alias: Any, template: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/templates/{id_or_alias}", json=template)

    def delete_template(self, id_or_alias: Any) -> Dict[str, Any]:
        return self._request("DELETE", f"/templates/{id_or_alias}")


def _error_from_response(resp: requests.Response, path: str) -> ApiError:
    message = resp.text[:200]
    error_code: Optional[int] = None
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = str(body.get("Message") or message)
        code = body.get("ErrorCode")
        if isinstance(code, int) or (isinstance(code, str) and code.isdigit()):
            error_code = int(code)
    return ApiError(
        f"API error for {path}: {message}",
        status_code=resp.status_code,
        error_code=error_code,
    )
