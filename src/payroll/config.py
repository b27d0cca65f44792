# src/payroll/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",            # auto-load .env (optional; process env wins)
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    APP_TITLE: str = "payroll-desk"
    LOG_LEVEL: str = "INFO"

    # Employee data source (attendance service)
    EMPLOYEE_API_BASE: str = "https://attendance-three-lemon.vercel.app"
    EMPLOYEE_API_TIMEOUT: int = 10     # seconds

    # Pay period clock
    TIMEZONE: str = "Asia/Kolkata"

    # Payslip defaults
    DEFAULT_WORKED_DAYS: int = 22
    DEFAULT_PAYMENT_MODE: str = "Bank Transfer"
    NOT_AVAILABLE: str = "N/A"


settings = Settings()
