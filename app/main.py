import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from app.core.config import settings
from app.core.database import engine
from app.core.errors import LoginRequired, PortalError
from app.core.logging_context import configure_logging, set_request_id
from app.core.session import LOGIN_PATH
from app.services.background import drain
from app.api.v1.auth.router import router as auth_router
from app.api.v1.customer.dashboard import router as dashboard_router
from app.api.v1.customer.bookings import router as bookings_router
from app.api.v1.customer.payments import router as payments_router
from app.api.v1.customer.profile import router as profile_router
from app.api.v1.customer.support import router as support_router
from app.api.v1.customer.notifications import router as notifications_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s portal (project %s)", settings.APP_NAME, settings.PROJECT_ID)
    yield
    await drain(timeout=10)
    await engine.dispose()


app = FastAPI(
    title=f"{settings.APP_NAME} Customer Portal",
    description="Waste-management customer portal: bookings, payments, profile and support",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Signed-cookie session, expires after the idle window
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_IDLE_MINUTES * 60,
    same_site="lax",
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = set_request_id(request.headers.get("X-Request-ID"))
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# ============== Error Handlers ==============

@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse(LOGIN_PATH, status_code=303)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Please check the form fields and try again.",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


# Include routers
app.include_router(auth_router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(dashboard_router, prefix="/api/v1/customer", tags=["Dashboard"])
app.include_router(bookings_router, prefix="/api/v1/customer", tags=["Bookings"])
app.include_router(payments_router, prefix="/api/v1/customer", tags=["Payments"])
app.include_router(profile_router, prefix="/api/v1/customer", tags=["Profile"])
app.include_router(support_router, prefix="/api/v1/customer", tags=["Support"])
app.include_router(notifications_router, prefix="/api/v1/customer", tags=["Notifications"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "project": settings.PROJECT_ID}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
