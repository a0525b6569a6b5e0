from fastapi import APIRouter
from app.api.v1.routes.auth import router as auth_router
from app.api.v1.routes.companions import router as companions_router
from app.api.v1.routes.users import router as users_router
from app.api.v1.routes.admin import router as admin_router
from app.api.v1.routes.destinations import router as destinations_router
from app.api.v1.routes.bookings import router as bookings_router
from app.api.v1.routes.reviews import router as reviews_router
from app.api.v1.routes.leads import router as leads_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth_router)
api_router.include_router(companions_router)
api_router.include_router(users_router)
api_router.include_router(admin_router)
api_router.include_router(destinations_router)
api_router.include_router(bookings_router)
api_router.include_router(reviews_router)
api_router.include_router(leads_router)
