from typing import Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from backoffice.models.plan import Plan, EbayPlanDetails, AmazonPlanDetails, Marketplace
from backoffice.schemas.plan import PlanCreate, PlanUpdate, EbayPlanDetailsIn, AmazonPlanDetailsIn
from backoffice.services.profit import calculate_profit
from backoffice.utils.numbers import to_decimal

PLAN_FIELDS = (
    "product_name", "ean", "unit_price", "sell_price", "source_link",
    "sold_items", "shipping_charges", "shipping_cost", "status",
)


def get_plans(
    db: Session,
    user_id: UUID,
    marketplace: Optional[Marketplace] = None,
) -> list[Plan]:
    query = db.query(Plan).options(
        selectinload(Plan.ebay_details),
        selectinload(Plan.amazon_details),
    ).filter(Plan.user_id == user_id)

    if marketplace:
        query = query.filter(Plan.marketplace == marketplace.value)

    return query.order_by(Plan.created_at.desc()).all()


def get_plan(db: Session, user_id: UUID, plan_id: UUID) -> Optional[Plan]:
    return db.query(Plan).filter(
        Plan.id == plan_id,
        Plan.user_id == user_id
    ).first()


def _plan_profit(obj_in: Union[PlanCreate, PlanUpdate]):
    if obj_in.profit is not None:
        return to_decimal(obj_in.profit)

    ebay = obj_in.ebay_details
    amazon = obj_in.amazon_details
    breakdown = calculate_profit(
        obj_in.marketplace,
        unit_price=obj_in.unit_price,
        sell_price=obj_in.sell_price,
        shipping_charges=obj_in.shipping_charges,
        shipping_cost=obj_in.shipping_cost,
        vat=ebay.vat if ebay else 0,
        ebay_commission=ebay.ebay_commission if ebay else 15,
        advertising_percentage=ebay.advertising_percentage if ebay else 0,
        fulfillment_cost=amazon.fulfillment_cost if amazon else 0,
    )
    return breakdown["profit"]


def _apply(plan: Plan, obj_in: Union[PlanCreate, PlanUpdate]) -> None:
    data = obj_in.model_dump(include=set(PLAN_FIELDS))
    for field in ("unit_price", "sell_price", "shipping_charges", "shipping_cost"):
        data[field] = to_decimal(data[field])
    for field, value in data.items():
        setattr(plan, field, value)

    plan.marketplace = obj_in.marketplace.value
    plan.profit = _plan_profit(obj_in)

    # marketplace details are upserted alongside the plan
    if obj_in.marketplace == Marketplace.ebay:
        details = obj_in.ebay_details
        if details is None:
            details = EbayPlanDetailsIn()
        if plan.ebay_details is None:
            plan.ebay_details = EbayPlanDetails()
        plan.ebay_details.product_link = details.product_link
        plan.ebay_details.vat = to_decimal(details.vat)
        plan.ebay_details.ebay_commission = to_decimal(details.ebay_commission)
        plan.ebay_details.advertising_percentage = to_decimal(details.advertising_percentage)
    else:
        details = obj_in.amazon_details
        if details is None:
            details = AmazonPlanDetailsIn()
        if plan.amazon_details is None:
            plan.amazon_details = AmazonPlanDetails()
        plan.amazon_details.fulfillment_cost = to_decimal(details.fulfillment_cost)
        plan.amazon_details.fee_per_item = to_decimal(details.fee_per_item)
        plan.amazon_details.storage_fees = to_decimal(details.storage_fees)
        plan.amazon_details.fulfillment_type = details.fulfillment_type


def create_plan(db: Session, user_id: UUID, obj_in: PlanCreate) -> Plan:
    plan = Plan(user_id=user_id)
    _apply(plan, obj_in)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


def update_plan(db: Session, plan: Plan, obj_in: PlanUpdate) -> Plan:
    try:
        _apply(plan, obj_in)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(plan)
    return plan


def delete_plan(db: Session, plan: Plan) -> None:
    db.delete(plan)
    db.commit()
