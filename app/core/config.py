from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://impulse:impulse@db:5432/impulse_journal"
    APP_ENV: str = "development"
    SECRET_KEY: str = "changeme-secret-key"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # --- Auth ---
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60
    DEFAULT_USERNAME: str = "admin"
    DEFAULT_PASSWORD: str = "admin123"

    # --- Completion service (any OpenAI-compatible endpoint) ---
    OPENAI_API_KEY: str = ""
    OPENAI_API_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    OPENAI_TIMEOUT_SECONDS: float = 30.0
    OPENAI_MAX_RETRIES: int = 2
    AI_TEMPERATURE: float = 0.7
    ANALYSIS_MAX_TOKENS: int = 500
    CHAT_MAX_TOKENS: int = 500
    REPORT_MAX_TOKENS: int = 800

    # --- Context windows ---
    CONTEXT_WINDOW_DAYS: int = 7
    CHAT_CONTEXT_LIMIT: int = 10

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
