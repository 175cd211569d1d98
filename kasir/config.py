from pydantic_settings import BaseSettings, SettingsConfigDict
class Settings(BaseSettings):
    APP_ENV: str = "dev"
    APP_SECRET: str
    DB_URL: str = "sqlite:///./kasir.db"
    JWT_ISS: str = "kasir"
    JWT_EXP_MIN: int = 12*60
    TZ: str = "UTC"                      # "today" for sales, reports and seed data
    STORE_NAMESPACE: str = "pos"         # record store key prefix
    SEED_DEMO: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"              # comma separated
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
settings = Settings()
