"""HTTP client for the clipboard sync API.

Mirrors the browser's service layer: sign in with a Google ID token, keep the
session token, and call the clipboard endpoints with it.
"""

from typing import Any

import httpx


class ClipboardApiClient:
    """Thin httpx wrapper around the clipboard sync API.

    Errors surface as ``httpx.HTTPStatusError``.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)
        self._access_token = access_token

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._access_token)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ClipboardApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Auth

    def sign_in_with_google(self, id_token: str) -> dict[str, Any]:
        """Exchange a Google ID token for a session token and keep it.

        Returns:
            AuthResponse dict (accessToken, tokenType, expiresInSeconds)
        """
        result = self._request("POST", "/api/auth/google", json={"idToken": id_token}, auth=False)
        self._access_token = result["accessToken"]
        return result

    def sign_out(self) -> None:
        """Forget the session token."""
        self._access_token = None

    def get_profile(self) -> dict[str, Any]:
        return self._request("GET", "/api/profile/me")

    # Clipboard

    def list_items(self) -> list[dict[str, Any]]:
        """List clipboard items, newest first."""
        items: list[dict[str, Any]] = self._request("GET", "/api/clipboard")["items"]
        return items

    def create_text(self, markdown_content: str, title: str | None = None) -> str:
        """Create a markdown note and return its id."""
        payload = {"title": title, "markdownContent": markdown_content}
        item_id: str = self._request("POST", "/api/clipboard/text", json=payload)["id"]
        return item_id

    def upload_file(
        self,
        file_name: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        title: str | None = None,
    ) -> str:
        """Upload a file and return its id."""
        data = {"title": title} if title else None
        item_id: str = self._request(
            "POST",
            "/api/clipboard/files",
            files={"file": (file_name, content, content_type)},
            data=data,
        )["id"]
        return item_id

    def delete_item(self, item_id: str) -> None:
        self._request("DELETE", f"/api/clipboard/{item_id}")

    def _request(self, method: str, path: str, auth: bool = True, **kwargs: Any) -> Any:
        headers: dict[str, str] = {}
        if auth and self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"

        response = self._http.request(method, path, headers=headers, **kwargs)
        response.raise_for_status()

        if response.status_code == 204 or not response.content:
            return None
        return response.json()
