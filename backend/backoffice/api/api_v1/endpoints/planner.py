from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_current_active_user
from backoffice.crud import crud_plan
from backoffice.models.plan import Marketplace
from backoffice.models.user import User
from backoffice.schemas.common import Message
from backoffice.schemas.plan import (
    PlanCreate,
    PlanUpdate,
    Plan as PlanSchema,
    ProfitInput,
    ProfitBreakdown,
)
from backoffice.services.profit import calculate_profit

router = APIRouter()

@router.post("/calculate", response_model=ProfitBreakdown)
def calculate(
    profit_in: ProfitInput,
    current_user: User = Depends(get_current_active_user)
):
    """Profit breakdown for a candidate product"""
    return calculate_profit(**profit_in.model_dump())

@router.get("/ebay", response_model=List[PlanSchema])
def get_plans(
    marketplace: Optional[Marketplace] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Sourcing plans, newest first"""
    return crud_plan.get_plans(db, current_user.id, marketplace=marketplace)

@router.post("/ebay", response_model=PlanSchema, status_code=status.HTTP_201_CREATED)
def create_plan(
    plan_in: PlanCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Create a plan (profit computed when not given)"""
    return crud_plan.create_plan(db, current_user.id, plan_in)

@router.get("/ebay/{plan_id}", response_model=PlanSchema)
def get_plan(
    plan_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    plan = crud_plan.get_plan(db, current_user.id, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan

@router.put("/ebay/{plan_id}", response_model=PlanSchema)
def update_plan(
    plan_id: UUID,
    plan_in: PlanUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Update a plan and upsert its marketplace details"""
    plan = crud_plan.get_plan(db, current_user.id, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return crud_plan.update_plan(db, plan, plan_in)

@router.delete("/ebay/{plan_id}", response_model=Message)
def delete_plan(
    plan_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    plan = crud_plan.get_plan(db, current_user.id, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    crud_plan.delete_plan(db, plan)
    return {"message": "Plan deleted successfully"}
