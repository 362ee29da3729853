from pydantic import Field, model_validator
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from the .env file.
load_dotenv()


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Pydantic's BaseSettings handles type validation automatically.
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Project Info
    PROJECT_NAME: str = "Furniture Catalog Admin API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # DynamoDB Configuration
    AWS_REGION: str = Field(..., description="Region of the DynamoDB tables.")
    AWS_ACCESS_KEY_ID: str = Field(...)
    AWS_SECRET_ACCESS_KEY: str = Field(...)
    DYNAMODB_ENDPOINT_URL: Optional[str] = Field(
        None,
        description="URL for a local DynamoDB. Leave empty for AWS.",
    )

    DYNAMODB_TABLE_SECTIONS: str = Field(...)
    DYNAMODB_TABLE_CATEGORIES: str = Field(...)
    DYNAMODB_TABLE_SUBCATEGORIES: str = Field(...)
    DYNAMODB_TABLE_PRODUCTS: str = Field(...)
    DYNAMODB_TABLE_BANNERS: str = Field(...)

    # Object Storage Configuration (S3-compatible, e.g. Cloudflare R2)
    R2_ENDPOINT: Optional[str] = Field(
        None,
        description="Endpoint of the S3-compatible object store.",
    )
    R2_ACCESS_KEY_ID: Optional[str] = None
    R2_SECRET_ACCESS_KEY: Optional[str] = None
    R2_BUCKET_NAME: str = Field(...)
    R2_PUBLIC_DOMAIN: str = Field(
        ..., description="Public base URL the uploaded objects are served from."
    )
    MAX_GALLERY_IMAGES: int = 5

    # Admin credentials
    ADMIN_EMAIL: str = Field(...)
    ADMIN_PASSWORD: str = Field(...)
    REQUIRE_ADMIN_AUTH: bool = True

    @model_validator(mode="after")
    def _fallback_object_store_keys(self) -> "Settings":
        # The object store reuses the AWS keys unless it has its own pair.
        if not self.R2_ACCESS_KEY_ID:
            self.R2_ACCESS_KEY_ID = self.AWS_ACCESS_KEY_ID
        if not self.R2_SECRET_ACCESS_KEY:
            self.R2_SECRET_ACCESS_KEY = self.AWS_SECRET_ACCESS_KEY
        self.R2_PUBLIC_DOMAIN = self.R2_PUBLIC_DOMAIN.rstrip("/")
        return self


# Instantiate the settings object to be used throughout the application.
settings = Settings()
