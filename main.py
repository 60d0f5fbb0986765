from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from app.api.routes import attendance, auth, contact
from app.core.config import DEFAULT_SECRET_KEY, settings
from app.core.exceptions import AppError, app_error_handler
from app.core.logging_config import get_logger, setup_logging
from app.core.logging_middleware import RequestLoggingMiddleware
from app.db.init_db import init_db

logger = get_logger("app.main")

app = FastAPI(
    title="Church Admin API",
    description="Contact, attendance and dashboard analytics for church administrators",
)

@app.on_event("startup")
async def startup_event():
    setup_logging(environment=settings.ENVIRONMENT)
    if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; using the development placeholder")
    init_db()

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.add_exception_handler(AppError, app_error_handler)

@app.get("/")
async def root():
    return {"message": "Welcome to the Church Admin API"}

@app.get("/health")
async def health():
    return {"status": "ok"}

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(contact.router, prefix="/contacts", tags=["Contacts"])
app.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
