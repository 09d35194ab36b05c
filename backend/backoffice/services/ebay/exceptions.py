from typing import Optional


class EbayError(Exception):
    """Base error for the eBay integration"""
    status_code = 400

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details


class EbayNotConnectedError(EbayError):
    """User has no eBay account linked (or it was disconnected)"""
    status_code = 400


class EbayAuthError(EbayError):
    """OAuth failure: bad code, refresh rejected, invalid state"""
    status_code = 401


class EbayApiError(EbayError):
    """eBay REST API answered with an error"""
    status_code = 502

    def __init__(self, message: str, details=None, upstream_status: Optional[int] = None):
        super().__init__(message, details)
        self.upstream_status = upstream_status
