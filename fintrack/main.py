import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.errors import LedgerError
from .database import init_db
from .routers import ai as ai_router
from .routers import auth as auth_router
from .routers import budgets as budgets_router
from .routers import dashboard as dashboard_router
from .routers import transactions as transactions_router


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Fintrack – Backend", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.on_event("startup")
    def on_startup():
        init_db()
        logger.info("Fintrack backend started (%s)", settings.environment)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(auth_router.router)
    app.include_router(transactions_router.router)
    app.include_router(transactions_router.balance_router)
    app.include_router(budgets_router.router)
    app.include_router(dashboard_router.router)
    app.include_router(ai_router.router)

    return app


app = create_app()
