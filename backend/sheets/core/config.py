from typing import List, Optional
from dotenv import load_dotenv
import os

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # CORS
        self.ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173")

        # DynamoDB
        self.DYNAMODB_ENABLED = os.getenv("DYNAMODB_TABLE_NAME") is not None
        self.DYNAMODB_TABLE_NAME: Optional[str] = os.getenv("DYNAMODB_TABLE_NAME")
        self.AWS_REGION = os.getenv("AWS_REGION", "us-east-1")

        # Storage
        self.SHEET_STORAGE_DIR = os.getenv("SHEET_STORAGE_DIR", "backend/data/sheets")

        # Application
        self.APP_TITLE = "Reactive Sheets"
        self.DEBUG = os.getenv("DEBUG", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def allowed_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


settings = Settings()
