import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pharmareserve.core.config import settings
from pharmareserve.core.exceptions import DomainError, ForbiddenError
from pharmareserve.db.database import engine, Base
from pharmareserve.db import models  # noqa: F401 - реєстрація моделей у Base.metadata
from pharmareserve.routers import (
    admin_router,
    auth_router,
    medicines_router,
    pharmacies_router,
    reservations_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%s)", engine.url.render_as_string(hide_password=True))
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Бронювання ліків у перевірених аптеках",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    log = logger.warning if isinstance(exc, ForbiddenError) else logger.info
    log("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # Деталі лише в лог, клієнту - загальне повідомлення
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "An internal error occurred"})


app.include_router(auth_router.router, prefix="/auth", tags=["Auth"])
app.include_router(pharmacies_router.router, prefix="/pharmacies", tags=["Pharmacies"])
app.include_router(medicines_router.router, prefix="/medicines", tags=["Medicines"])
app.include_router(reservations_router.router, prefix="/reservations", tags=["Reservations"])
app.include_router(admin_router.router, prefix="/admin", tags=["Administration"])


@app.get("/")
def root():
    return {"message": "PharmaReserve API is running"}
