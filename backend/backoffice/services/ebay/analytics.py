"""
Analytics API: seller standards and traffic report
"""
from datetime import date
from typing import Optional

from .client import EbayClient

SELLER_STANDARDS_PATH = "/sell/analytics/v1/seller_standards_profile"
TRAFFIC_REPORT_PATH = "/sell/analytics/v1/traffic_report"

DEFAULT_METRICS = ["CLICK_THROUGH_RATE", "LISTING_IMPRESSION_TOTAL", "LISTING_VIEWS_TOTAL", "TRANSACTION"]


def get_seller_standards(client: EbayClient) -> dict:
    return client.get(SELLER_STANDARDS_PATH)


def get_traffic_report(
    client: EbayClient,
    start_date: date,
    end_date: date,
    metrics: Optional[list] = None,
    marketplace_id: Optional[str] = None,
) -> dict:
    marketplace_id = marketplace_id or client.config.marketplace_id
    params = {
        "dimension": "DAY",
        "filter": (
            f"marketplace_ids:{{{marketplace_id}}},"
            f"date_range:[{start_date.strftime('%Y%m%d')}..{end_date.strftime('%Y%m%d')}]"
        ),
        "metric": ",".join(metrics or DEFAULT_METRICS),
    }
    return client.get(TRAFFIC_REPORT_PATH, params=params)
