"""
Tests for the identity providers.
"""
import httpx
import pytest
from pytest_httpx import HTTPXMock

from app.config import CopilotSettings
from app.logic.errors import AuthenticationError, IdentityProviderError, IdentityRejectedError
from app.services.identity import BaseIdentityProvider, GitHubIdentityProvider

USER_URL = "https://api.github.com/user"


@pytest.fixture
def provider():
    settings = CopilotSettings(product_name="MSDevPlatform", product_version="1.2.3")
    return GitHubIdentityProvider(settings)


class TestBaseIdentityProvider:
    """Test the abstract identity provider contract."""

    def test_base_provider_cannot_be_instantiated_directly(self):
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            BaseIdentityProvider()


class TestGitHubIdentityProvider:
    """Test the GitHub identity provider."""

    def test_is_available(self, provider):
        assert provider.is_available() is True

    @pytest.mark.asyncio
    async def test_resolve_user(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            url=USER_URL,
            method="GET",
            json={"login": "alice", "id": 42, "name": "Alice"},
        )

        user = await provider.resolve_user("gho_token")

        assert user.login == "alice"
        assert user.id == 42

        request = httpx_mock.get_request()
        assert request.headers["Authorization"] == "Bearer gho_token"
        assert request.headers["User-Agent"] == "MSDevPlatform/1.2.3"
        assert request.headers["Accept"] == "application/vnd.github+json"

    @pytest.mark.asyncio
    async def test_custom_api_url(self, httpx_mock: HTTPXMock):
        settings = CopilotSettings(github_api_url="https://github.example.com/api/v3")
        httpx_mock.add_response(
            url="https://github.example.com/api/v3/user",
            json={"login": "bob"},
        )

        user = await GitHubIdentityProvider(settings).resolve_user("token")

        assert user.login == "bob"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_rejected_token(self, provider, httpx_mock: HTTPXMock, status_code):
        httpx_mock.add_response(url=USER_URL, status_code=status_code, json={"message": "Bad credentials"})

        with pytest.raises(IdentityRejectedError) as exc_info:
            await provider.resolve_user("bad")

        assert isinstance(exc_info.value, AuthenticationError)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_server_error(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=USER_URL, status_code=500)

        with pytest.raises(IdentityProviderError) as exc_info:
            await provider.resolve_user("token")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        with pytest.raises(IdentityProviderError, match="not reachable"):
            await provider.resolve_user("token")

    @pytest.mark.asyncio
    async def test_invalid_payload(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=USER_URL, json={"id": 1})

        with pytest.raises(IdentityProviderError, match="invalid user"):
            await provider.resolve_user("token")

    @pytest.mark.asyncio
    async def test_non_json_payload(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(url=USER_URL, text="<html></html>")

        with pytest.raises(IdentityProviderError):
            await provider.resolve_user("token")
