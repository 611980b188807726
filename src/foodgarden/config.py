from pydantic import Field
from pydantic_settings import BaseSettings

# HS256 keys shorter than the hash output weaken the signature.
MIN_JWT_SECRET_LENGTH = 32


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # e.g. mongodb://localhost:27017/foodsdb
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5000
    debug: bool = False
    jwt_secret: str = Field(min_length=MIN_JWT_SECRET_LENGTH)
    production: bool = False  # Secure, SameSite=None cookies for a cross-site frontend
    cors_origins: list[str] = ["https://food-garden-bd.web.app", "http://localhost:5173"]

    model_config = {
        "env_file": [".env"],
        "env_prefix": "FOODGARDEN_",
        "extra": "ignore",
    }
