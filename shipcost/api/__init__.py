from fastapi import APIRouter

from shipcost.api.routes import shipping

api_router = APIRouter()
api_router.include_router(shipping.router)
