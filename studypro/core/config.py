from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App Basics
    app_env: str = "dev"
    app_name: str = "StudyPro"
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    log_level: str = "info"

    # Database
    database_url: str = "sqlite:///./studypro.db"
    db_echo: bool = False

    # JWT
    jwt_secret: str = "change-this-secret"
    jwt_alg: str = "HS256"
    jwt_access_ttl_min: int = 7 * 24 * 60
    auth_cookie_name: str = "auth_token"

    # Passwords
    bcrypt_rounds: int = 12

    # First-run admin account
    admin_email: str = "admin@studypro.local"
    admin_password: str = "Admin@123"

    # Tell pydantic to read from .env file
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )

settings = Settings()
