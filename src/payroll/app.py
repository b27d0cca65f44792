# src/payroll/app.py
import logging

from fastapi import FastAPI

from src.payroll.config import settings
from src.payroll.utils.error_handler import register_exception_handlers
from src.payroll.routes.employees_api import router as employees_router
from src.payroll.routes.payslip_api import router as payslips_router


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title=settings.APP_TITLE, version="1.0")
    register_exception_handlers(app)

    # ----------------------------------------------------------
    # ROUTERS
    # ----------------------------------------------------------
    app.include_router(employees_router)
    app.include_router(payslips_router)
    return app


app = create_app()
