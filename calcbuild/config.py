from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./calcbuild.db"
    LOG_LEVEL: str = "INFO"

    # Single storage slot holding every saved project as one JSON map
    STORE_KEY: str = "calcbuild_projects"
    UNNAMED_PROJECT_KEY: str = "Unnamed Project"

    # Exports
    COMPANY_NAME: str = "CalcBuild"
    CSV_FALLBACK_NAME: str = "calcbuild"
    CURRENCY_SYMBOL: str = "€"

    class Config:
        env_file = ".env"


settings = Settings()
