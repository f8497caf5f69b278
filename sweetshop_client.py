"""
sweetshop_client.py

A small programmatic client for the Sweet Shop API (token login + authenticated
requests). Useful for scripts, bots and smoke tests against a running server.

Environment variables expected by `make_client_from_env()`:
- SWEETSHOP_API_URL: e.g. "http://localhost:5000/api"
- SWEETSHOP_API_EMAIL
- SWEETSHOP_API_PASSWORD

Optional:
- SWEETSHOP_API_TOKEN: pre-seeded token (otherwise we login)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests


class ApiError(RuntimeError):
    def __init__(self, message: str, status_code: int = 0, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


def _payload(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


@dataclass
class SweetShopClient:
    base_url: str
    email: str
    password: str
    token: Optional[str] = None
    timeout: float = 30

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _auth(self, path: str) -> Dict[str, Any]:
        resp = requests.post(
            self._url(path),
            json={"email": self.email, "password": self.password},
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        data = _payload(resp)
        if resp.status_code >= 400:
            raise ApiError(f"POST {path} failed ({resp.status_code}): {resp.text}", resp.status_code, data)
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise ApiError(f"Auth response missing token: {data}", resp.status_code, data)
        self.token = token
        return data

    def register(self) -> Dict[str, Any]:
        """POST /auth/register. The first account on a fresh server is the admin."""
        return self._auth("/auth/register")

    def login(self) -> str:
        """POST /auth/login with a JSON body: email, password."""
        self._auth("/auth/login")
        return self.token

    def _request(self, method: str, path: str, *, json: Any = None, params: Dict[str, Any] | None = None) -> Any:
        if not self.token:
            self.login()

        resp = requests.request(
            method,
            self._url(path),
            json=json,
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
        )

        # Token expired (7 day lifetime): retry once with a fresh login.
        if resp.status_code == 401:
            self.login()
            resp = requests.request(
                method,
                self._url(path),
                json=json,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )

        if resp.status_code >= 400:
            raise ApiError(f"{method} {path} failed ({resp.status_code}): {resp.text}", resp.status_code, _payload(resp))
        return resp.json()

    # ----------------------------
    # Catalog
    # ----------------------------

    def list_sweets(self) -> list[Dict[str, Any]]:
        return self._request("GET", "/sweets")["sweets"]

    def search_sweets(
        self,
        *,
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> list[Dict[str, Any]]:
        params = {"name": name, "category": category, "minPrice": min_price, "maxPrice": max_price}
        params = {k: v for k, v in params.items() if v is not None}
        return self._request("GET", "/sweets/search", params=params)["sweets"]

    def get_sweet(self, sweet_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/sweets/{sweet_id}")["sweet"]

    def create_sweet(self, *, name: str, category: str, price: float, quantity: int = 0) -> Dict[str, Any]:
        """admin-only"""
        payload = {"name": name, "category": category, "price": price, "quantity": quantity}
        return self._request("POST", "/sweets", json=payload)["sweet"]

    def update_sweet(self, sweet_id: int, **fields: Any) -> Dict[str, Any]:
        """admin-only; send only the fields to change"""
        return self._request("PUT", f"/sweets/{sweet_id}", json=fields)["sweet"]

    def delete_sweet(self, sweet_id: int) -> Dict[str, Any]:
        """admin-only"""
        return self._request("DELETE", f"/sweets/{sweet_id}")["sweet"]

    # ----------------------------
    # Inventory
    # ----------------------------

    def purchase(self, sweet_id: int, quantity: int = 1) -> Dict[str, Any]:
        """
        Calls: POST /sweets/{id}/purchase
        Raises ApiError(400) with payload {available, requested} when stock is short.
        """
        return self._request("POST", f"/sweets/{sweet_id}/purchase", json={"quantity": quantity})

    def restock(self, sweet_id: int, quantity: int) -> Dict[str, Any]:
        """admin-only"""
        return self._request("POST", f"/sweets/{sweet_id}/restock", json={"quantity": quantity})


def make_client_from_env() -> SweetShopClient:
    base_url = os.getenv("SWEETSHOP_API_URL", "").strip()
    email = os.getenv("SWEETSHOP_API_EMAIL", "").strip()
    password = os.getenv("SWEETSHOP_API_PASSWORD", "").strip()
    token = os.getenv("SWEETSHOP_API_TOKEN", "").strip() or None

    if not base_url:
        raise RuntimeError("Missing SWEETSHOP_API_URL")
    if not email:
        raise RuntimeError("Missing SWEETSHOP_API_EMAIL")
    if not password:
        raise RuntimeError("Missing SWEETSHOP_API_PASSWORD")

    return SweetShopClient(base_url=base_url, email=email, password=password, token=token)


if __name__ == "__main__":
    client = make_client_from_env()
    for sweet in client.list_sweets():
        print(f"{sweet['id']:>4}  {sweet['name']:<28} {sweet['category']:<10} {sweet['price']:>6.2f}  x{sweet['quantity']}")
