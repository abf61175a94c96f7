from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional
from .errors import ApiError, NetworkError, NonApiResponseError
from .utils import from_json

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def looks_like_html(text: str) -> bool:
    t = text.lower()
    return "<!doctype html" in t or "<html" in t


class HttpClient:
    """Single-attempt JSON transport. Every failure surfaces as an `AsterError` subclass."""

    def __init__(self, base_url: str, session: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self.base = base_url.rstrip("/")
        self._owns_session = session is None
        self._client = session if session is not None else httpx.AsyncClient(timeout=timeout)

    async def aclose(self):
        if self._owns_session:
            await self._client.aclose()

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None,
                  headers: Optional[Dict[str, str]] = None) -> Any:
        return await self._request("GET", path, params=params, headers=headers)

    async def post(self, path: str, data: Any = None,
                   headers: Optional[Dict[str, str]] = None) -> Any:
        # a pre-signed query string goes out byte-for-byte as the form body
        if isinstance(data, str):
            hdrs = {"Content-Type": FORM_CONTENT_TYPE, **(headers or {})}
            return await self._request("POST", path, content=data, headers=hdrs)
        return await self._request("POST", path, json=data, headers=headers)

    # -------- core --------
    async def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base}{path}"
        try:
            r = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logging.warning("ASTER %s %s network error: %s", method, path.split("?")[0], exc.__class__.__name__)
            raise NetworkError(exc.__class__.__name__, str(exc) or repr(exc)) from exc

        if r.is_error:
            raise self._error_from(r)

        try:
            return from_json(r.content)
        except ValueError:
            if looks_like_html(r.text):
                raise NonApiResponseError(r.status_code, r.reason_phrase, self._display_url(r))
            raise ApiError("UNKNOWN", f"Invalid JSON body: {r.text[:200]}", r.status_code, self._display_url(r))

    def _error_from(self, r: httpx.Response) -> Exception:
        url = self._display_url(r)
        text = r.text
        try:
            body = from_json(r.content)
        except ValueError:
            body = None
            if looks_like_html(text):
                logging.error("ASTER %s -> %s HTML error page", url, r.status_code)
                return NonApiResponseError(r.status_code, r.reason_phrase, url)
        if not isinstance(body, dict):
            body = {}
        code = body.get("code", "UNKNOWN")
        msg = body.get("msg") or r.reason_phrase or "Unknown error"
        logging.error("ASTER %s -> %s | %s", url, r.status_code, text[:500])
        return ApiError(code, msg, r.status_code, url)

    @staticmethod
    def _display_url(r: httpx.Response) -> str:
        # never echo the signed query (it carries the signature)
        u = r.request.url
        return f"{u.scheme}://{u.netloc.decode('ascii')}{u.path}"
