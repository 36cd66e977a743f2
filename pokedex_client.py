"""Pokedex API client.

A small synchronous wrapper around the Pokedex REST API using the
``requests`` library.  Every method returns a tuple ``(data, error)``:
on success ``error`` is ``None``; on failure ``data`` is ``None`` and
``error`` is a dictionary with ``status_code`` and ``message`` keys.

* :meth:`PokedexAPI.list_pokemon` – one page of Pokemon.
* :meth:`PokedexAPI.get_pokemon` – a Pokemon by number, id or name.
* :meth:`PokedexAPI.create_pokemon` – create a Pokemon.
* :meth:`PokedexAPI.update_pokemon` – partially update a Pokemon.
* :meth:`PokedexAPI.delete_pokemon` – delete a Pokemon by id.
* :meth:`PokedexAPI.run_seed` – reload the database from PokeAPI.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class PokedexAPI:
    """Client for interacting with the Pokedex API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api/v1",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            prefix: Path prefix of the versioned API.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/") + prefix
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/pokemon/``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
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
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Pokemon operations
    # ------------------------------------------------------------------
    def list_pokemon(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve a page of Pokemon ordered by Pokedex number.

        Omitted parameters fall back to the server defaults.
        """
        params = {key: value for key, value in (("limit", limit), ("offset", offset)) if value is not None}
        data, error = self._request("GET", "/pokemon/", params=params or None)
        if error:
            return [], error
        return data or [], None

    def get_pokemon(self, term: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Fetch a Pokemon by number, id or name."""
        return self._request("GET", f"/pokemon/{quote(str(term), safe='')}")

    def create_pokemon(
        self, name: str, no: int, **attributes: Any
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a Pokemon; extra keyword arguments are stored as attributes."""
        payload = {"name": name, "no": no, **attributes}
        return self._request("POST", "/pokemon/", json_body=payload)

    def update_pokemon(
        self, term: Any, **changes: Any
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Apply a partial update to the Pokemon matching ``term``."""
        return self._request("PATCH", f"/pokemon/{quote(str(term), safe='')}", json_body=changes)

    def delete_pokemon(self, pokemon_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Delete a Pokemon by MongoDB id and return the removed entry."""
        return self._request("DELETE", f"/pokemon/{pokemon_id}")

    def run_seed(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Ask the server to reload its database from PokeAPI."""
        return self._request("GET", "/seed/")
