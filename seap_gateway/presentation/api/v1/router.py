from fastapi import APIRouter

from .evaluation import evaluation_router
from .reference import reference_router

router = APIRouter()

router.include_router(evaluation_router, tags=["Evaluations"])
router.include_router(reference_router, tags=["Reference"])
