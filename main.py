from typing import Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

import logging
from settings.config import settings
from settings.errors import register_exception_handlers
from settings.logging_config import configure_logging
from db.postgres import init_postgres, close_postgres
from auth.auth import router as auth_router
from accounts.account_routes import router as account_router, transfer_router
from budgets.budget_routes import router as budget_router
from transactions.transaction_routes import router as transaction_router
from incomes.income_routes import router as income_router
from expenses.expense_routes import router as expense_router
from goals.goal_routes import router as goal_router
from reminders.reminder_routes import router as reminder_router
from users.user_routes import router as user_router
from tax.tax_routes import router as tax_router

logger = logging.getLogger(__name__)


def get_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting Personal Finance API")
    app = FastAPI(title="Personal Finance API")

    # CORS: enable permissive defaults for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Processing request: %s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    # DB lifecycle
    @app.on_event("startup")
    async def on_startup() -> None:
        logger.info("Initializing database")
        await init_postgres()

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        logger.info("Closing database")
        await close_postgres()

    # Routers
    app.include_router(auth_router)
    app.include_router(account_router)
    app.include_router(transfer_router)
    app.include_router(budget_router)
    app.include_router(transaction_router)
    app.include_router(income_router)
    app.include_router(expense_router)
    app.include_router(goal_router)
    app.include_router(reminder_router)
    app.include_router(user_router)
    app.include_router(tax_router)
    logger.info("Routers initialized successfully")

    # Health
    @app.get("/health")
    async def health_check() -> Dict[str, str]:
        logger.info("Health check")
        return {"status": "ok"}

    logger.info("API started")
    return app


# ASGI app instance
app = get_app()
