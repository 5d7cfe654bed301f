import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from mealprep.api.auth import AuthContext, get_auth_context, get_current_user
from mealprep.database import get_db
from mealprep.exceptions import NotFoundError
from mealprep.models.user import User
from mealprep.schemas.dietary_profile import MealPlanPreferences
from mealprep.schemas.envelope import ok
from mealprep.schemas.meal_plan import DraftPlan, FullMealPlan, MealPlanData, MealPlanHeader
from mealprep.services import export_service, generation_service, plan_service, plan_view

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/meal-plan",
    tags=["Meal Plans"]
)


def _owned_plan(db: Session, plan_id: str, user: User) -> FullMealPlan:
    full_plan = plan_service.get_full_meal_plan(db, plan_id, user_id=user.id)
    if full_plan is None:
        raise NotFoundError("Meal plan not found")
    return full_plan


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("")
def generate_meal_plan(
    prefs: MealPlanPreferences,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context)
):
    """
    Generates a 7-day plan. Signed-in callers get the preferences and the plan
    stored; anonymous callers get the draft back only.
    """
    draft = generation_service.generate_plan(prefs)

    if not auth.is_authenticated:
        return ok(DraftPlan(plan=draft))

    return ok(plan_service.save_generated_plan(db, auth.user_id, prefs, draft))


@router.get("")
def get_latest_meal_plan(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # data is null when the user has no plan yet
    return ok(plan_service.get_latest_full_meal_plan(db, current_user.id))


@router.get("/history")
def get_meal_plan_history(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    plans = plan_service.get_all_meal_plans_by_user_id(db, current_user.id)
    return ok([MealPlanHeader.model_validate(plan) for plan in plans])


@router.post("/export")
def export_draft_plan(plan: MealPlanData):
    """PDF of a plan that only lives in the browser."""
    return _pdf_response(export_service.render_plan_pdf(DraftPlan(plan=plan)), "meal_plan.pdf")


@router.get("/{plan_id}")
def get_meal_plan(
    plan_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ok(_owned_plan(db, plan_id, current_user))


@router.get("/{plan_id}/view")
def get_meal_plan_view(
    plan_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return ok(plan_view.to_plan_source(_owned_plan(db, plan_id, current_user)))


@router.post("/{plan_id}/totals")
def recompute_meal_plan_totals(
    plan_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _owned_plan(db, plan_id, current_user)
    plan = plan_service.recompute_plan_totals(db, plan_id)
    return ok(MealPlanHeader.model_validate(plan))


@router.delete("/{plan_id}")
def delete_meal_plan(
    plan_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    _owned_plan(db, plan_id, current_user)
    plan_service.delete_meal_plan(db, plan_id)
    logger.info(f"User {current_user.id} deleted plan {plan_id}")
    return ok({"deleted": plan_id})


@router.get("/{plan_id}/export")
def export_meal_plan(
    plan_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    source = plan_view.to_plan_source(_owned_plan(db, plan_id, current_user))
    return _pdf_response(export_service.render_plan_pdf(source), f"meal_plan_{plan_id}.pdf")
