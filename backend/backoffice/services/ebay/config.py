"""
eBay API configuration: credentials, sandbox / production hosts, scopes
"""
from dataclasses import dataclass, field
from enum import Enum

from backoffice.core.config import settings


class EbayEnvironment(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"


SCOPES = [
    "https://api.ebay.com/oauth/api_scope",
    "https://api.ebay.com/oauth/api_scope/sell.fulfillment",
    "https://api.ebay.com/oauth/api_scope/sell.fulfillment.readonly",
    "https://api.ebay.com/oauth/api_scope/sell.inventory",
    "https://api.ebay.com/oauth/api_scope/sell.inventory.readonly",
    "https://api.ebay.com/oauth/api_scope/sell.account.readonly",
    "https://api.ebay.com/oauth/api_scope/sell.analytics.readonly",
]

# client-credentials tokens only carry the public scope
APPLICATION_SCOPES = ["https://api.ebay.com/oauth/api_scope"]


@dataclass
class EbayConfig:
    app_id: str = ""
    cert_id: str = ""
    dev_id: str = ""
    ru_name: str = ""
    environment: EbayEnvironment = EbayEnvironment.SANDBOX
    marketplace_id: str = "EBAY_DE"
    timeout: int = 30
    scopes: list = field(default_factory=lambda: list(SCOPES))

    @classmethod
    def from_settings(cls) -> "EbayConfig":
        env = settings.EBAY_ENVIRONMENT.lower()
        return cls(
            app_id=settings.EBAY_APP_ID,
            cert_id=settings.EBAY_CERT_ID,
            dev_id=settings.EBAY_DEV_ID,
            ru_name=settings.EBAY_REDIRECT_URI,
            environment=EbayEnvironment.PRODUCTION if env == "production" else EbayEnvironment.SANDBOX,
            marketplace_id=settings.EBAY_MARKETPLACE_ID,
            timeout=settings.EBAY_HTTP_TIMEOUT,
        )

    @property
    def is_sandbox(self) -> bool:
        return self.environment == EbayEnvironment.SANDBOX

    @property
    def api_base_url(self) -> str:
        if self.is_sandbox:
            return "https://api.sandbox.ebay.com"
        return "https://api.ebay.com"

    @property
    def auth_url(self) -> str:
        if self.is_sandbox:
            return "https://auth.sandbox.ebay.com/oauth2/authorize"
        return "https://auth.ebay.com/oauth2/authorize"

    @property
    def token_url(self) -> str:
        return f"{self.api_base_url}/identity/v1/oauth2/token"

    @property
    def scopes_string(self) -> str:
        return " ".join(self.scopes)

    def is_configured(self) -> bool:
        return all([self.app_id, self.cert_id, self.ru_name])
