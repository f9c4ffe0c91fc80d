"""
ApiClient provides an async JSON interface to the tutoring backend using httpx.

All endpoint methods forward to a single transport primitive, request(), which
composes the URL, merges headers, includes the session cookies, and turns
non-success responses into ApiError.

Attributes:
    DEFAULT_HEADERS (dict): Headers sent with every request unless overridden.
    CREDENTIAL_MODES (tuple): Accepted values for RequestOptions.credentials.

Classes:
    ApiError: Normalized HTTP error carrying message, status and parsed body.
    RequestOptions: Caller supplied overrides for one request.
    RequestConfig: Effective configuration built fresh for every request.
    ApiClient: The client. Use as an async context manager.

Functions:
    merge_headers(*layers):
        Case-insensitive header merge. Later layers win; a None value removes
        the header.

    build_request_config(options, default_headers):
        Builds the RequestConfig for a call from the defaults and the options.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, Iterable, Mapping, Optional, Union

import httpx

from .config import ClientConfig
from .logs import log_event
from .models import NotificationPreferences, PrivacySettings, ProfileUpdate, QuizAnswer

DEFAULT_HEADERS: Dict[str, str] = {"Content-Type": "application/json"}
CREDENTIAL_MODES = ("include", "same-origin", "omit")


class ApiError(Exception):
    def __init__(self, message: str, status: int, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data


@dataclass
class RequestOptions:
    method: str = "GET"
    body: Any = None
    files: Optional[Dict[str, Any]] = None
    headers: Optional[Mapping[str, Optional[str]]] = None
    credentials: Optional[str] = None


@dataclass
class RequestConfig:
    method: str
    headers: Dict[str, str]
    credentials: str
    body: Any = None
    files: Optional[Dict[str, Any]] = None


def merge_headers(*layers: Optional[Mapping[str, Optional[str]]]) -> Dict[str, str]:
    merged: Dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            for existing in [k for k in merged if k.lower() == key.lower()]:
                del merged[existing]
            if value is not None:
                merged[key] = value
    return merged


def build_request_config(
    options: RequestOptions | None = None,
    default_headers: Mapping[str, Optional[str]] | None = None,
) -> RequestConfig:
    options = options or RequestOptions()
    credentials = options.credentials or "include"
    if credentials not in CREDENTIAL_MODES:
        raise ValueError(f"unknown credentials mode {credentials!r}")
    return RequestConfig(
        method=options.method.upper(),
        headers=merge_headers(DEFAULT_HEADERS, default_headers, options.headers),
        credentials=credentials,
        body=options.body,
        files=options.files,
    )


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        data = response.json()
    except ValueError:
        data = {"message": f"HTTP error {response.status_code}"}
    message = None
    if isinstance(data, dict):
        message = data.get("message")
    return ApiError(message or f"HTTP {response.status_code}", response.status_code, data)


class ApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        api_base: str = "/api",
        timeout: float = 10,
        headers: Mapping[str, Optional[str]] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        cookies: httpx.Cookies | None = None,
    ):
        self._api_base = api_base
        self._headers = dict(headers or {})
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            cookies=cookies,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        cookies: httpx.Cookies | None = None,
    ) -> "ApiClient":
        return cls(
            config.base_url,
            api_base=config.api_base,
            timeout=config.timeout,
            headers=config.headers,
            transport=transport,
            cookies=cookies,
        )

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    async def request(self, endpoint: str, options: RequestOptions | None = None) -> Any:
        """Send one request and return the decoded JSON body.

        Raises ApiError for non-success statuses. Transport errors and
        undecodable success bodies propagate as raised by httpx / json.
        Every failure is logged once with the endpoint before re-raising.
        """
        url = f"{self._api_base}{endpoint}"
        method = (options.method if options else "GET").upper()
        try:
            config = build_request_config(options, self._headers)
            request = self._client.build_request(
                config.method,
                url,
                json=config.body if config.files is None else None,
                data=config.body if config.files is not None else None,
                files=config.files,
                headers=config.headers,
            )
            if config.credentials == "omit" and "Cookie" in request.headers:
                del request.headers["Cookie"]
            response = await self._client.send(request)
            if not response.is_success:
                raise _error_from_response(response)
            if not response.content:
                return None
            return response.json()
        except Exception as e:
            log_event(
                "request_failed",
                level=logging.ERROR,
                endpoint=endpoint,
                method=method,
                status=getattr(e, "status", None),
                error=str(e),
            )
            raise

    # Authentication

    async def login(self, email: str, password: str) -> Any:
        return await self.request(
            "/login", RequestOptions("POST", {"email": email, "password": password}))

    async def register(self, name: str, email: str, password: str) -> Any:
        return await self.request(
            "/register",
            RequestOptions("POST", {"name": name, "email": email, "password": password}),
        )

    async def logout(self) -> Any:
        return await self.request("/logout", RequestOptions("POST"))

    async def get_current_user(self) -> Any:
        return await self.request("/user")

    async def get_user_profile(self) -> Any:
        return await self.request("/users/profile")

    async def update_user_profile(self, profile: ProfileUpdate) -> Any:
        return await self.request(
            "/users/profile", RequestOptions("PUT", profile.to_payload()))

    async def change_password(self, current_password: str, new_password: str) -> Any:
        return await self.request(
            "/users/change-password",
            RequestOptions("POST", {
                "current_password": current_password,
                "new_password": new_password,
            }),
        )

    async def update_notification_preferences(self, preferences: NotificationPreferences) -> Any:
        return await self.request(
            "/users/notification-preferences", RequestOptions("PUT", preferences.to_payload()))

    async def update_privacy_settings(self, settings: PrivacySettings) -> Any:
        return await self.request(
            "/users/privacy-settings", RequestOptions("PUT", settings.to_payload()))

    # AI interactions

    async def ask_question(self, question: str) -> Any:
        return await self.request("/ask", RequestOptions("POST", {"question": question}))

    async def transcribe_audio(self, audio: Union[bytes, BinaryIO]) -> Any:
        # httpx sets the multipart boundary once Content-Type is removed
        return await self.request(
            "/voice",
            RequestOptions(
                "POST",
                files={"audio": ("recording.wav", audio, "audio/wav")},
                headers={"Content-Type": None},
            ),
        )

    # Quiz

    async def get_quiz(self) -> Any:
        return await self.request("/quiz")

    async def submit_quiz(self, answers: Iterable[QuizAnswer]) -> Any:
        return await self.request(
            "/submit-quiz",
            RequestOptions("POST", {"answers": [a.to_payload() for a in answers]}),
        )

    # Dashboard

    async def get_dashboard_data(self, time_range: str = "week") -> Any:
        return await self.request(f"/dashboard?range={time_range}")

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
        return False
