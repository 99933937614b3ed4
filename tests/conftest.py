"""Pytest configuration and fixtures."""

import json
from collections.abc import AsyncGenerator
from http.cookies import SimpleCookie
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from repogate.auth.cookies import SignedCookieCodec
from repogate.auth.models import Session
from repogate.config import Settings
from repogate.main import create_app
from repogate.utils.http_client import create_provider_client

TEST_SECRET = "Kq3vZ8rT1xW6yN0pL4mB7cD2fH9jS5aE"
VALID_CODE = "abc123"
VALID_TOKEN = "tok_1"


class FakeGitHub:
    """In-memory stand-in for the GitHub OAuth and REST endpoints."""

    def __init__(self) -> None:
        self.repos: list[dict] = [
            {"full_name": "octocat/Hello-World", "permissions": {"admin": True}},
            {"full_name": "octocat/Spoon-Knife", "permissions": {"admin": False}},
        ]
        self.tokens = {VALID_CODE: VALID_TOKEN}
        self.revoked: set[str] = set()
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/login/oauth/access_token":
            form = parse_qs(request.content.decode())
            code = form.get("code", [""])[0]
            if code not in self.tokens:
                return httpx.Response(
                    200,
                    json={
                        "error": "bad_verification_code",
                        "error_description": "The code passed is incorrect or expired.",
                    },
                )
            return httpx.Response(
                200,
                json={"access_token": self.tokens[code], "token_type": "bearer", "scope": ""},
            )

        if request.url.path == "/user/repos":
            token = request.headers.get("authorization", "").removeprefix("Bearer ")
            if token not in self.tokens.values() or token in self.revoked:
                return httpx.Response(401, json={"message": "Bad credentials"})
            per_page = int(request.url.params.get("per_page", "30"))
            return httpx.Response(200, content=json.dumps(self.repos[:per_page]))

        return httpx.Response(404, json={"message": "Not Found"})


def parse_set_cookies(response: httpx.Response) -> dict[str, SimpleCookie]:
    """Return the Set-Cookie headers of a response keyed by cookie name."""
    cookies = {}
    for header in response.headers.get_list("set-cookie"):
        jar = SimpleCookie()
        jar.load(header)
        for name in jar:
            cookies[name] = jar
    return cookies


def set_cookie_values(response: httpx.Response) -> dict[str, str]:
    """Return name -> value for each cookie set by a response."""
    return {name: jar[name].value for name, jar in parse_set_cookies(response).items()}


@pytest.fixture
def settings() -> Settings:
    """Settings for tests, independent of the environment and .env."""
    return Settings(
        _env_file=None,
        app_env="test",
        secret=TEST_SECRET,
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_uri="http://test/callback",
        repo_page_size=5,
    )


@pytest.fixture
def codec() -> SignedCookieCodec:
    return SignedCookieCodec(TEST_SECRET)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def provider_client(fake_github: FakeGitHub) -> httpx.AsyncClient:
    """httpx client whose requests are answered by FakeGitHub."""
    return create_provider_client(transport=httpx.MockTransport(fake_github.handler))


@pytest.fixture
def app(settings: Settings, provider_client: httpx.AsyncClient) -> FastAPI:
    return create_app(settings, http_client=provider_client)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an unauthenticated test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


def login(client: AsyncClient, codec: SignedCookieCodec, session: Session) -> None:
    """Put the signed cookies for ``session`` into the client's cookie jar."""
    client.cookies.clear()
    for name, value in codec.encode(session):
        client.cookies.set(name, value)


@pytest_asyncio.fixture
async def authenticated_client(
    client: AsyncClient, codec: SignedCookieCodec
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client carrying a valid access token cookie."""
    login(client, codec, Session(access_token=VALID_TOKEN))
    yield client
