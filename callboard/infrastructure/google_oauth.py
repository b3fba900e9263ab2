"""Google OAuth2 sign-in — authorization-code flow over httpx."""

from urllib.parse import urlencode

import httpx
import structlog

from callboard.core.exceptions import UnauthorizedException, UpstreamError
from callboard.domain.identity import ExternalProfile

logger = structlog.get_logger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


class GoogleIdentityProvider:
    name = "google"

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str, timeout: float = 10.0):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid profile email",
            "state": state,
            "prompt": "select_account",
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> ExternalProfile:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                token_response = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "redirect_uri": self.redirect_uri,
                        "grant_type": "authorization_code",
                    },
                )
                if token_response.status_code == 400:
                    # invalid_grant: code expired, reused or forged
                    raise UnauthorizedException("Google authorization code rejected")
                token_response.raise_for_status()
                access_token = token_response.json()["access_token"]

                userinfo_response = await client.get(
                    GOOGLE_USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                userinfo_response.raise_for_status()
                info = userinfo_response.json()
        except httpx.HTTPStatusError as e:
            logger.warning("Google OAuth request failed", status_code=e.response.status_code)
            raise UpstreamError(
                "Google sign-in failed",
                details={"status": e.response.status_code, "body": e.response.text[:500]},
            )
        except httpx.HTTPError as e:
            logger.warning("Google OAuth connection error", error=str(e))
            raise UpstreamError("Google sign-in failed", details={"error": str(e)})

        return ExternalProfile(
            provider=self.name,
            subject=str(info["sub"]),
            email=info.get("email"),
            display_name=info.get("name"),
            avatar=info.get("picture"),
        )
