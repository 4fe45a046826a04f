from fastapi import APIRouter, Depends

from app.api.deps import enforce_rate_limit
from app.api.routes import analytics, generate, utils

api_router = APIRouter(dependencies=[Depends(enforce_rate_limit)])
api_router.include_router(generate.router, tags=["generate"])
api_router.include_router(analytics.router, tags=["analytics"])
api_router.include_router(utils.router, tags=["utils"])
