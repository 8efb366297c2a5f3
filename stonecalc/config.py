from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./stonecalc.db"
    APP_TITLE: str = "Stone Calculator"
    BRAND_NAME: str = "Stone Pro"
    LOG_LEVEL: str = "INFO"

    # Material / unit constants, override per market
    MURUBBA_SQ_M: float = 9.290304          # 1 murubba = 100 sq ft
    STONE_DENSITY_T_PER_M3: float = 2.7     # granite / marble class
    FEET_TO_METERS: float = 0.3048
    INCHES_TO_CM: float = 2.54

    HISTORY_LIMIT: int = 100

    class Config:
        env_file = ".env"


settings = Settings()
