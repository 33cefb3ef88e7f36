"""API v1 router aggregator."""

from fastapi import APIRouter

from diffvault.api.v1 import diff

router = APIRouter(prefix="/api/v1")
router.include_router(diff.router)
