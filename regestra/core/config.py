from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="regestra-api", validation_alias="APP_NAME")
    app_env: str = Field(default="dev", validation_alias="APP_ENV")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    database_url: str = Field(validation_alias="DATABASE_URL")

    identity_jwt_secret: str = Field(default="change-me", validation_alias="IDENTITY_JWT_SECRET")
    identity_jwt_algorithm: str = Field(default="HS256", validation_alias="IDENTITY_JWT_ALGORITHM")
    identity_jwt_audience: str | None = Field(default="authenticated", validation_alias="IDENTITY_JWT_AUDIENCE")

    storage_base_url: str | None = Field(default=None, validation_alias="STORAGE_BASE_URL")
    storage_public_base_url: str | None = Field(default=None, validation_alias="STORAGE_PUBLIC_BASE_URL")
    storage_api_key: str | None = Field(default=None, validation_alias="STORAGE_API_KEY")
    storage_bucket: str = Field(default="artworks", validation_alias="STORAGE_BUCKET")
    storage_timeout_seconds: int = Field(default=20, validation_alias="STORAGE_TIMEOUT_SECONDS")

    enhancer_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        validation_alias="ENHANCER_BASE_URL",
    )
    enhancer_api_key: str | None = Field(default=None, validation_alias="ENHANCER_API_KEY")
    enhancer_model_name: str = Field(default="gemini-2.5-flash-image", validation_alias="ENHANCER_MODEL_NAME")
    enhancer_timeout_seconds: int = Field(default=60, validation_alias="ENHANCER_TIMEOUT_SECONDS")
    enhancer_default_instruction: str = Field(
        default=(
            "Enhance the quality of this image. Improve sharpness, clarity, and color balance. "
            "Do not add, remove, or change any content from the original image."
        ),
        validation_alias="ENHANCER_DEFAULT_INSTRUCTION",
    )

    feed_recommendation_limit: int = Field(default=5, validation_alias="FEED_RECOMMENDATION_LIMIT")
    feed_recommendation_interval: int = Field(default=2, validation_alias="FEED_RECOMMENDATION_INTERVAL")
    feed_recommendation_reason: str = Field(
        default="Recommended for you",
        validation_alias="FEED_RECOMMENDATION_REASON",
    )

    conversation_poll_interval_seconds: int = Field(default=2, validation_alias="CONVERSATION_POLL_INTERVAL_SECONDS")
    notification_list_limit: int = Field(default=100, validation_alias="NOTIFICATION_LIST_LIMIT")

    deleted_user_name: str = Field(default="Deleted user", validation_alias="DELETED_USER_NAME")
    deleted_user_avatar: str = Field(default="", validation_alias="DELETED_USER_AVATAR")
    default_collection_name: str = Field(default="Favorites", validation_alias="DEFAULT_COLLECTION_NAME")


settings = Settings()
ALLOWED_COMMISSION_STATUSES = {"Open", "Closed", "Not Available"}
