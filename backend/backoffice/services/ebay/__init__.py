from .config import EbayConfig, EbayEnvironment
from .exceptions import EbayError, EbayNotConnectedError, EbayAuthError, EbayApiError
from .oauth import EbayOAuth, EbayToken, sign_state, read_state
from .client import EbayClient, create_client_for_user, store_user_token, clear_user_token

__all__ = [
    "EbayConfig",
    "EbayEnvironment",
    "EbayError",
    "EbayNotConnectedError",
    "EbayAuthError",
    "EbayApiError",
    "EbayOAuth",
    "EbayToken",
    "sign_state",
    "read_state",
    "EbayClient",
    "create_client_for_user",
    "store_user_token",
    "clear_user_token",
]
