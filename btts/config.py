"""Engine configuration using Pydantic Settings."""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (BTTS_ prefix)."""

    # Match feed
    FEED_URL: str = (
        "https://raw.githubusercontent.com/Winmix713/matches12/refs/heads/main/"
        "cleaned_matches_supabase.csv"
    )
    FEED_TIMEOUT_SECONDS: float = 15.0

    # Prediction ledger persistence
    LEDGER_STORAGE_KEY: str = "btts_predictions"
    LEDGER_PATH: str = "./data/ledger.json"

    # Statistics windows (matches, feed order)
    FORM_WINDOW: int = 5            # lastFiveMatches
    RANKING_FORM_WINDOW: int = 10   # win form shown on the leaderboard
    FORM_TREND_WINDOW: int = 50     # BTTS trend snapshot stored with predictions
    H2H_WINDOW: int = 50            # most recent encounters considered
    H2H_RECENT_FORM: int = 5

    # Prediction flags
    DERBY_MIN_MEETINGS: int = 10    # derby when meetings > this
    SEASON_END_MONTH: int = 5       # May onward counts as season end

    # Fixture slate
    MAX_SLATE_FIXTURES: int = 8

    # Telemetry
    METRICS_ENABLED: bool = True

    class Config:
        env_prefix = "BTTS_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
