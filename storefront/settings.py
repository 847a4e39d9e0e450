from __future__ import annotations
import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    BACKEND_URL: str = os.getenv("BACKEND_URL", "http://localhost:8000")
    USER_EMAIL: str = os.getenv("USER_EMAIL", "demo@shop.com")
    SHIPPING_ADDRESS: str = os.getenv("SHIPPING_ADDRESS", "Demo Address")
    PAYMENT_METHOD: str = os.getenv("PAYMENT_METHOD", "cod")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))

settings = Settings()
