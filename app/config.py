# =============================================================================
# Application Configuration — Pydantic Settings
# =============================================================================
#
# Loaded in this priority order (highest first):
#   1. Environment variables (e.g., `AGENT_BASE_URL=...`)
#   2. Values from the .env file
#   3. Default values defined below
#
# USAGE:
#   from app.config import settings
#   print(settings.agent_base_url)
# =============================================================================

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults point at a local agent gateway so the service starts without
    any configuration. In production, override via environment or .env.
    """

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    app_name: str = "Ledger Insight Agent"
    app_version: str = "0.1.0"
    debug: bool = True
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Remote Agent Service
    # -------------------------------------------------------------------------
    # All four agents sit behind one HTTP service. Uploads go to
    # {agent_base_url}/upload, agent calls to {agent_base_url}/agent.
    #
    # agent_timeout_seconds bounds every outbound call. A timeout is
    # reported to the orchestrators like any other call failure.
    # -------------------------------------------------------------------------
    agent_base_url: str = "http://localhost:8080/api"
    agent_api_key: str = ""
    agent_timeout_seconds: float = 120.0

    # -------------------------------------------------------------------------
    # Agent Identifiers
    # -------------------------------------------------------------------------
    # Remote ids of the four agent roles. The role set is closed (see
    # app.models.agents.AgentRole); only the ids are configurable.
    # -------------------------------------------------------------------------
    audit_agent_id: str = "69858cabe17e33c11eed1a1d"
    orchestrator_agent_id: str = "6985916de5d25ce3f598cb4b"
    news_agent_id: str = "6985913de17e33c11eed1a61"
    actuary_agent_id: str = "69859153e17e33c11eed1a66"

    # -------------------------------------------------------------------------
    # Ledger Intake
    # -------------------------------------------------------------------------
    max_ledger_bytes: int = 10 * 1024 * 1024  # 10 MiB, inclusive

    # -------------------------------------------------------------------------
    # Market-Context Enrichment
    # -------------------------------------------------------------------------
    # Fixed query sent to the news agent after every successful audit.
    # Not user-editable.
    # -------------------------------------------------------------------------
    market_context_query: str = (
        "Check for recent market news affecting household expenses, "
        "subscriptions, and utility bills in India"
    )

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------
    export_filename_prefix: str = "financial-report"

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache a Settings instance.

    In tests, override with FastAPI's dependency_overrides or patch
    attributes on the module-level `settings` object.
    """
    return Settings()


# ---------------------------------------------------------------------------
# Module-level convenience instance
# ---------------------------------------------------------------------------
settings = Settings()
