# yardview/api/v1/router.py
from fastapi import APIRouter
from yardview.api.v1.endpoints import yard, blocks

api_router = APIRouter()

# Incluir routers
api_router.include_router(
    yard.router,
    prefix="/yard",
    tags=["yard"]
)

api_router.include_router(
    blocks.router,
    prefix="/blocks",
    tags=["blocks"]
)
