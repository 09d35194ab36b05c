"""
eBay OAuth 2.0
- authorization URL (user consent)
- authorization code -> user token
- refresh token -> new user token
- client credentials -> application token
"""
import base64
import logging
from datetime import datetime, timedelta
from typing import Optional
from urllib.parse import urlencode

import requests
from jose import JWTError

from backoffice.core.security import create_access_token, decode_access_token

from .config import EbayConfig, APPLICATION_SCOPES
from .exceptions import EbayAuthError, EbayError

logger = logging.getLogger(__name__)

# user tokens live two hours, refresh tokens about 18 months
DEFAULT_ACCESS_TOKEN_TTL = 7200


class EbayToken:
    def __init__(self, access_token: str, expires_in: int,
                 refresh_token: Optional[str] = None,
                 refresh_token_expires_in: Optional[int] = None,
                 token_type: str = "User Access Token"):
        now = datetime.utcnow()
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.token_type = token_type
        self.expires_at = now + timedelta(seconds=expires_in)
        self.refresh_token_expires_at = (
            now + timedelta(seconds=refresh_token_expires_in)
            if refresh_token_expires_in else None
        )

    @classmethod
    def from_response(cls, data: dict, fallback_refresh_token: Optional[str] = None) -> "EbayToken":
        if not data.get("access_token"):
            raise EbayAuthError("Token response has no access_token", details=data)
        return cls(
            access_token=data["access_token"],
            expires_in=int(data.get("expires_in", DEFAULT_ACCESS_TOKEN_TTL)),
            refresh_token=data.get("refresh_token", fallback_refresh_token),
            refresh_token_expires_in=data.get("refresh_token_expires_in"),
            token_type=data.get("token_type", "User Access Token"),
        )


class EbayOAuth:
    def __init__(self, config: Optional[EbayConfig] = None):
        self.config = config or EbayConfig.from_settings()

    def _basic_auth_header(self) -> str:
        """Basic base64(app_id:cert_id)"""
        credentials = f"{self.config.app_id}:{self.config.cert_id}"
        return "Basic " + base64.b64encode(credentials.encode("utf-8")).decode("utf-8")

    def _require_credentials(self):
        if not self.config.is_configured():
            raise EbayError("eBay API credentials are not configured")

    def get_authorization_url(self, state: Optional[str] = None) -> str:
        self._require_credentials()
        params = {
            "client_id": self.config.app_id,
            "response_type": "code",
            "redirect_uri": self.config.ru_name,
            "scope": self.config.scopes_string,
        }
        if state:
            params["state"] = state
        return f"{self.config.auth_url}?{urlencode(params)}"

    def _token_request(self, data: dict) -> dict:
        self._require_credentials()
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Authorization": self._basic_auth_header(),
        }
        try:
            response = requests.post(
                self.config.token_url,
                headers=headers,
                data=data,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error("eBay token request failed: %s", e)
            raise EbayAuthError(f"eBay token request failed: {e}")

        if response.status_code != 200:
            try:
                error = response.json()
            except ValueError:
                error = {"error_description": response.text}
            logger.warning("eBay token endpoint returned %s: %s", response.status_code, error)
            raise EbayAuthError(
                error.get("error_description") or error.get("error") or "eBay token request rejected",
                details=error,
            )
        return response.json()

    def exchange_code_for_token(self, code: str) -> EbayToken:
        data = self._token_request({
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.config.ru_name,
        })
        logger.info("eBay authorization code exchanged")
        return EbayToken.from_response(data)

    def refresh_access_token(self, refresh_token: str) -> EbayToken:
        if not refresh_token:
            raise EbayAuthError("No eBay refresh token available")
        data = self._token_request({
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "scope": self.config.scopes_string,
        })
        logger.info("eBay access token refreshed")
        # eBay keeps the refresh token unchanged on refresh
        return EbayToken.from_response(data, fallback_refresh_token=refresh_token)

    def get_application_token(self) -> EbayToken:
        data = self._token_request({
            "grant_type": "client_credentials",
            "scope": " ".join(APPLICATION_SCOPES),
        })
        return EbayToken.from_response(data)


STATE_PURPOSE = "ebay_oauth"
STATE_TTL = timedelta(minutes=10)


def sign_state(user_id) -> str:
    """Short-lived signed state tying the OAuth round trip to a user"""
    return create_access_token(user_id, expires_delta=STATE_TTL, extra_claims={"purpose": STATE_PURPOSE})


def read_state(state: str) -> str:
    """User id from a signed state; raises EbayAuthError when invalid or expired"""
    try:
        payload = decode_access_token(state)
    except JWTError:
        raise EbayAuthError("Invalid or expired OAuth state")
    if payload.get("purpose") != STATE_PURPOSE or not payload.get("sub"):
        raise EbayAuthError("Invalid OAuth state")
    return payload["sub"]
