"""
Marketplace profit calculation for sourcing plans.

eBay:   fee = revenue * commission% + sell price * ads% * (1 + vat%)
Amazon: fee = revenue * 15% + fulfillment cost

profit = revenue net of VAT - (fee + shipping cost + unit price)
"""
from decimal import Decimal

from backoffice.models.plan import Marketplace
from backoffice.utils.numbers import Number, to_decimal, money, safe_divide

AMAZON_REFERRAL_PERCENTAGE = Decimal(15)
HUNDRED = Decimal(100)


def calculate_profit(
    marketplace: Marketplace,
    unit_price: Number,
    sell_price: Number,
    shipping_charges: Number = 0,
    shipping_cost: Number = 0,
    vat: Number = 0,
    ebay_commission: Number = 15,
    advertising_percentage: Number = 0,
    fulfillment_cost: Number = 0,
) -> dict:
    unit_price = to_decimal(unit_price)
    sell_price = to_decimal(sell_price)
    shipping_cost = to_decimal(shipping_cost)
    vat_factor = 1 + to_decimal(vat) / HUNDRED

    total_revenue = sell_price + to_decimal(shipping_charges)
    net_revenue = total_revenue / vat_factor

    if Marketplace(marketplace) == Marketplace.amazon:
        fee = total_revenue * AMAZON_REFERRAL_PERCENTAGE / HUNDRED + to_decimal(fulfillment_cost)
    else:
        fee = (
            total_revenue * to_decimal(ebay_commission) / HUNDRED
            + sell_price * to_decimal(advertising_percentage) / HUNDRED * vat_factor
        )

    total_costs = fee + shipping_cost + unit_price
    profit = net_revenue - total_costs

    return {
        "total_revenue": money(total_revenue),
        "net_revenue": money(net_revenue),
        "vat_amount": money(total_revenue - net_revenue),
        "marketplace_fee": money(fee),
        "total_costs": money(total_costs),
        "profit": money(profit),
        "margin": money(safe_divide(profit * HUNDRED, total_revenue)),
    }
