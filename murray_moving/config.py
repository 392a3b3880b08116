from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    COMPANY_NAME: str = "Murray Moving"
    COMPANY_EMAIL: str = "info@murraymoving.com"
    COMPANY_PHONE: str = ""
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Admin auth: single back-office account, no user table
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD_HASH: str = ""  # bcrypt hash; REQUIRED, login fails loudly if missing
    JWT_SECRET: str = ""  # REQUIRED in production, fail loudly if missing at auth time
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRE_MINUTES: int = 60

    class Config:
        env_file = ".env"


settings = Settings()
