"""
HTTP-клиент Supabase

- PostgREST: /rest/v1/<table>   (select / insert / update / delete / count)
- GoTrue:    /auth/v1/...        (вход, выход, текущий пользователь, регистрация)

Токен пользователя пробрасывается в Authorization, чтобы работал RLS.
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from teatro.errors import BackendError

logger = logging.getLogger(__name__)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(data, dict):
        for key in ("message", "msg", "error_description", "error"):
            if data.get(key):
                return str(data[key])
    return str(data)[:200]


class SupabaseClient:
    """Тонкая обёртка над REST API Supabase"""

    def __init__(
        self,
        url: str,
        api_key: str,
        access_token: Optional[str] = None,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def with_token(self, access_token: Optional[str]) -> "SupabaseClient":
        """Клиент с тем же соединением, но от имени другого пользователя"""
        return SupabaseClient(
            self.url,
            self.api_key,
            access_token=access_token,
            timeout=self.timeout,
            session=self.session,
        )

    def _headers(self, token: Optional[str] = None, extra: Optional[dict] = None) -> dict:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token or self.access_token or self.api_key}",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        token: Optional[str] = None,
        headers: Optional[dict] = None,
    ) -> requests.Response:
        url = f"{self.url}{path}"
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(token, headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("[Supabase] Error calling %s %s: %s", method, path, e)
            raise BackendError("Serviço indisponível", details=str(e))

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning("[Supabase] %s %s -> %s: %s", method, path, resp.status_code, message)
            raise BackendError(message, status=resp.status_code, details=message)
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return None

    # ---------- PostgREST ----------

    @staticmethod
    def _filter_params(filters: Optional[Dict[str, Any]]) -> dict:
        return {col: f"eq.{_format_value(v)}" for col, v in (filters or {}).items()}

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[dict]:
        params = {"select": columns, **self._filter_params(filters)}
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit
        resp = self._request("GET", f"/rest/v1/{table}", params=params)
        return self._json(resp) or []

    def select_one(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
    ) -> Optional[dict]:
        rows = self.select(table, columns, filters, limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, values: dict) -> dict:
        resp = self._request(
            "POST",
            f"/rest/v1/{table}",
            json=values,
            headers={"Prefer": "return=representation"},
        )
        rows = self._json(resp) or []
        if not rows:
            raise BackendError(f"Insert into {table} returned no rows")
        return rows[0]

    def update(self, table: str, values: dict, filters: Dict[str, Any]) -> List[dict]:
        """PATCH по фильтру; возвращает обновлённые строки"""
        resp = self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=self._filter_params(filters),
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return self._json(resp) or []

    def delete(self, table: str, filters: Dict[str, Any]) -> None:
        self._request("DELETE", f"/rest/v1/{table}", params=self._filter_params(filters))

    def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        resp = self._request(
            "HEAD",
            f"/rest/v1/{table}",
            params={"select": "*", **self._filter_params(filters)},
            headers={"Prefer": "count=exact"},
        )
        # Content-Range: 0-24/25  или  */0
        content_range = resp.headers.get("Content-Range", "")
        total = content_range.rsplit("/", 1)[-1]
        return int(total) if total.isdigit() else 0

    # ---------- GoTrue ----------

    def sign_in_with_password(self, email: str, password: str) -> dict:
        resp = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            token=self.api_key,
        )
        return self._json(resp) or {}

    def get_user(self, access_token: str) -> dict:
        resp = self._request("GET", "/auth/v1/user", token=access_token)
        return self._json(resp) or {}

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/auth/v1/logout", token=access_token)

    def recover(self, email: str) -> None:
        self._request("POST", "/auth/v1/recover", json={"email": email}, token=self.api_key)

    def admin_create_user(self, email: str, password: str, user_metadata: dict) -> dict:
        """Создание подтверждённого пользователя (нужен service role key)"""
        resp = self._request(
            "POST",
            "/auth/v1/admin/users",
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": user_metadata,
            },
        )
        return self._json(resp) or {}
