"""
eBay REST client
- bearer authentication with the user's access token
- refresh when the token expires within five minutes (or on a 401)
- new tokens are handed to a callback so the caller can persist them
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

import requests
from sqlalchemy.orm import Session

from backoffice.models.user import User
from .config import EbayConfig
from .exceptions import EbayApiError, EbayNotConnectedError
from .oauth import EbayOAuth, EbayToken

logger = logging.getLogger(__name__)

REFRESH_MARGIN = timedelta(minutes=5)

TokenCallback = Callable[[EbayToken], None]


class EbayClient:
    def __init__(
        self,
        access_token: str,
        refresh_token: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        on_token_refresh: Optional[TokenCallback] = None,
        config: Optional[EbayConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or EbayConfig.from_settings()
        self.oauth = EbayOAuth(self.config)
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.expires_at = expires_at
        self.on_token_refresh = on_token_refresh
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-EBAY-C-MARKETPLACE-ID": self.config.marketplace_id,
        })

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "EbayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def token_expiring(self) -> bool:
        if self.expires_at is None:
            return False
        return datetime.utcnow() >= self.expires_at - REFRESH_MARGIN

    def refresh(self) -> EbayToken:
        token = self.oauth.refresh_access_token(self.refresh_token)
        self.access_token = token.access_token
        self.refresh_token = token.refresh_token
        self.expires_at = token.expires_at
        if self.on_token_refresh:
            self.on_token_refresh(token)
        return token

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if self.token_expiring() and self.refresh_token:
            logger.info("eBay access token about to expire, refreshing")
            self.refresh()

        url = f"{self.config.api_base_url}{path}"
        response = self._send(method, url, params, json)

        if response.status_code == 401 and self.refresh_token:
            logger.warning("eBay rejected the access token, refreshing and retrying")
            self.refresh()
            response = self._send(method, url, params, json)

        if not 200 <= response.status_code < 300:
            try:
                details = response.json()
            except ValueError:
                details = {"message": response.text}
            logger.error("eBay %s %s failed: %s %s", method, path, response.status_code, details)
            raise EbayApiError(
                f"eBay API error ({response.status_code})",
                details=details,
                upstream_status=response.status_code,
            )

        if not response.content:
            return {}
        return response.json()

    def _send(self, method, url, params, json) -> requests.Response:
        try:
            return self.session.request(
                method.upper(),
                url,
                params=params,
                json=json,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error("eBay request to %s failed: %s", url, e)
            raise EbayApiError(f"eBay request failed: {e}")

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.request("GET", path, params=params)

    def put(self, path: str, json: Dict[str, Any]) -> Dict[str, Any]:
        return self.request("PUT", path, json=json)


def store_user_token(db: Session, user: User, token: EbayToken) -> None:
    user.ebay_access_token = token.access_token
    if token.refresh_token:
        user.ebay_refresh_token = token.refresh_token
    user.ebay_token_expiry = token.expires_at
    if token.refresh_token_expires_at:
        user.ebay_refresh_token_expiry = token.refresh_token_expires_at
    user.ebay_connected = True
    db.commit()


def clear_user_token(db: Session, user: User) -> None:
    user.ebay_access_token = None
    user.ebay_refresh_token = None
    user.ebay_token_expiry = None
    user.ebay_refresh_token_expiry = None
    user.ebay_connected = False
    db.commit()


def create_client_for_user(db: Session, user: User, config: Optional[EbayConfig] = None) -> EbayClient:
    """Client bound to the user's stored tokens; refreshed tokens are written back"""
    if not user.ebay_connected or not user.ebay_access_token:
        raise EbayNotConnectedError("eBay account not connected")

    def persist(token: EbayToken) -> None:
        store_user_token(db, user, token)
        logger.info("Stored refreshed eBay token for user %s", user.id)

    return EbayClient(
        access_token=user.ebay_access_token,
        refresh_token=user.ebay_refresh_token,
        expires_at=user.ebay_token_expiry,
        on_token_refresh=persist,
        config=config,
    )
