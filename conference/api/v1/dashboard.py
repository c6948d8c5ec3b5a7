"""Dashboard endpoints (staff only): counts and breakdowns over registrations and reviewers."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from conference.api.deps import StaffAuth
from conference.core.database import get_db
from conference.schemas.dashboard import (
    CountryCount,
    OverviewStats,
    PaymentStats,
    RecentActivity,
    ReviewerStats,
)
from conference.schemas.envelope import ApiResponse, success_response
from conference.services import dashboard

router = APIRouter()


@router.get("/stats/overview", response_model=ApiResponse[OverviewStats])
def get_overview_stats(
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[OverviewStats]:
    return success_response("Overview stats retrieved", dashboard.overview_stats(db))


@router.get("/stats/payment", response_model=ApiResponse[PaymentStats])
def get_payment_stats(
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[PaymentStats]:
    return success_response("Payment stats retrieved", dashboard.payment_stats(db))


@router.get("/stats/reviewers", response_model=ApiResponse[ReviewerStats])
def get_reviewer_stats(
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
) -> ApiResponse[ReviewerStats]:
    return success_response("Reviewer stats retrieved", dashboard.reviewer_stats(db))


@router.get("/analytics/countries", response_model=ApiResponse[list[CountryCount]])
def get_countries_distribution(
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
    limit: int = Query(default=10),
) -> ApiResponse[list[CountryCount]]:
    return success_response(
        "Countries distribution retrieved", dashboard.countries_distribution(db, limit)
    )


@router.get("/activity/recent", response_model=ApiResponse[RecentActivity])
def get_recent_activity(
    _staff: StaffAuth,
    db: Annotated[Session, Depends(get_db)],
    limit: int = Query(default=10),
) -> ApiResponse[RecentActivity]:
    return success_response("Recent activity retrieved", dashboard.recent_activity(db, limit))
