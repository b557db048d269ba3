import yaml
import os
from typing import Dict, Optional
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str


class ScoringConfig(BaseModel):
    """
    Configuration for the score aggregator.

    weights overrides the built-in defaults per component; any component not
    listed keeps its default. Rows in the score_weights table take
    precedence over these values.
    """
    weights: Dict[str, float] = Field(default_factory=dict)
    assessment_window: int = 20  # most recent assessments considered
    parallel_components: bool = False  # evaluate calculators in a thread pool
    max_workers: int = 4


class RankingConfig(BaseModel):
    """Relevance blend for per-job ranking (readiness vs. skill match)."""
    readiness_weight: float = 0.6
    skill_match_weight: float = 0.4


class TriggerConfig(BaseModel):
    """
    Configuration for the best-effort ranking refresh after mutations.

    When use_async_queue is enabled the refresh is handed to an RQ worker
    instead of running inline.
    """
    use_async_queue: bool = False
    redis_url: Optional[str] = None
    queue_name: str = "readiness"


class AppConfig(BaseModel):
    database: DatabaseConfig
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    triggers: TriggerConfig = Field(default_factory=TriggerConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another directory), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if not data.get('database'):
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var override for Redis URL
    env_redis_url = os.environ.get("REDIS_URL")
    if env_redis_url:
        if not data.get('triggers'):
            data['triggers'] = {}
        data['triggers']['redis_url'] = env_redis_url

    return AppConfig(**data)
