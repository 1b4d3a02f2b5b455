from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from ecocart.core.config import get_settings
from ecocart.core.errors import EcoError
from ecocart.core.lifespan import lifespan
from ecocart.api.v1.routers.health import router as health_router
from ecocart.api.v1.routers.products import router as products_router
from ecocart.api.v1.routers.eco import router as eco_router
from ecocart.api.v1.routers.cart import router as cart_router
from ecocart.core.logging import configure_logging

from fastapi.middleware.cors import CORSMiddleware
import logging, os

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS from env (CSV), e.g. ALLOWED_ORIGINS="https://shop.example.com,https://admin.example.com"
allowed_origins_env = os.getenv("ALLOWED_ORIGINS", "")
allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins if allowed_origins else ["http://localhost:3000"],
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Errors -------
@app.exception_handler(EcoError)
async def eco_error_handler(request: Request, exc: EcoError):
    level = logging.WARNING if exc.status_code < 500 else logging.ERROR
    logger.log(level, "%s %s -> %s %s: %s", request.method, request.url.path, exc.status_code, type(exc).__name__, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

# ------- Routes -------
app.include_router(health_router)
app.include_router(products_router, prefix=settings.api_prefix)   # catalog + alternatives + explanation
app.include_router(eco_router, prefix=settings.api_prefix)        # ad-hoc scoring / classification
app.include_router(cart_router, prefix=settings.api_prefix)       # cart, greener cart, swap
