"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Database (SQLite path)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "fcc_dcs.db")

    # Sampling tick and risk/escalation refresh in milliseconds
    UPDATE_INTERVAL_MS: int = int(os.getenv("UPDATE_INTERVAL_MS", "2000"))
    RISK_REFRESH_INTERVAL_MS: int = int(os.getenv("RISK_REFRESH_INTERVAL_MS", "10000"))

    # Simulation
    SIMULATION_SEED: int = int(os.getenv("SIMULATION_SEED", "42"))
    HISTORY_POINTS: int = int(os.getenv("HISTORY_POINTS", "30"))

    # Alarms are retained by query limit only
    ALARM_QUERY_LIMIT: int = int(os.getenv("ALARM_QUERY_LIMIT", "50"))

    # Causality override key in the key-value table
    CAUSALITY_STORAGE_KEY: str = os.getenv("CAUSALITY_STORAGE_KEY", "dcs_causality_graph")

    # Operator identity used by the console
    DEFAULT_OPERATOR: str = os.getenv("DEFAULT_OPERATOR", "operator")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
