from fastapi import APIRouter

from .health import health_router
from .installments import installments_router
from .work_orders import work_orders_router
from .advances import advances_router
from .saved_filters import saved_filters_router
from .periods import periods_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(installments_router, tags=["Installments"])
router.include_router(work_orders_router, tags=["Work Orders"])
router.include_router(advances_router, tags=["Advances"])
router.include_router(saved_filters_router, tags=["Saved Filters"])
router.include_router(periods_router, tags=["Periods"])
