"""Franchise API client.

A thin wrapper around the franchise HTTP API built on ``requests``.
Each method returns a tuple ``(data, error)``: on success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary
with the keys ``status_code`` and ``message``.  ``message`` is taken
from the server's ``{"message": ..., "error": ...}`` body when there
is one.

Example::

    api = FranchiseAPI(base_url="http://localhost:5000")
    franchise, error = api.create_franchise(
        {"name": "Acme Downtown", "company": "Acme Corp", "contactName": "Jane Doe"}
    )
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

BASE_PATH = "/api/franchises"

Error = Dict[str, Any]


class FranchiseAPI:
    """Client for the franchise API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:5000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url`.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or str(err_json)
                    if err_json.get("error"):
                        message = f"{message}: {err_json['error']}"
                except (ValueError, AttributeError):
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _item_path(franchise_id: Any) -> str:
        return f"{BASE_PATH}/{quote(str(franchise_id), safe='')}"

    # ------------------------------------------------------------------
    # Franchise operations
    # ------------------------------------------------------------------
    def list_franchises(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all franchises, newest first."""
        data, error = self._request("GET", BASE_PATH)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_franchise(self, franchise_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", self._item_path(franchise_id))

    def create_franchise(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a franchise.

        Args:
            payload: Body with at least ``name``, ``company`` and
                ``contactName``.
        """
        return self._request("POST", BASE_PATH, json_body=payload)

    def update_franchise(
        self, franchise_id: Any, changes: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Update the given fields of a franchise; other fields are kept."""
        return self._request("PUT", self._item_path(franchise_id), json_body=changes)

    def delete_franchise(self, franchise_id: Any) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", self._item_path(franchise_id))
        if error:
            return False, error
        return True, None

    def search_franchises(self, term: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Search franchises by a case-insensitive substring."""
        data, error = self._request("GET", f"{BASE_PATH}/search/{quote(term, safe='')}")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None
