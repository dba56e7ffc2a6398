# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - StatusConfig (dataclass)
#     statuses: tuple[str, ...]  (default POTENTIAL, ACTIVE, GRADUATED, SUSPENDED)
#     default_status: str        (default "POTENTIAL", owner of legacy criteria)
#
# - MySQLConfig (dataclass)
#     host / port / user / password / database
#     plan_table: str            (default "social_protection_benefitplan")
#     id_column: str             (default "UUID")
#     extension_column: str      (default "Json_ext")
#
# - FilterServiceConfig (dataclass)
#     graphql_url: str           (default "http://localhost:8000/api/graphql")
#     auth_token: str | None     (default None)
#     timeout_seconds: float     (default 10.0)
#     module_name: str           (default "individual")
#     object_type_name: str      (default "Individual")
#
# - AppConfig (dataclass)
#     status / mysql / filter_service
#     plans_file: str            (default "data/benefit_plans.json")
#     log_level: str             (default "INFO")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the singleton (tests change the environment between cases).
#
# USAGE:
# ------
#   from eligibility_criteria.config import get_config
#   config = get_config()
#   print(config.status.default_status)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from pathlib import Path

from dotenv import load_dotenv

from eligibility_criteria.errors import ConfigurationError


DEFAULT_STATUSES: Tuple[str, ...] = ("POTENTIAL", "ACTIVE", "GRADUATED", "SUSPENDED")
DEFAULT_STATUS = "POTENTIAL"


@dataclass
class StatusConfig:
    """Beneficiary status enumeration used to partition criteria."""
    statuses: Tuple[str, ...] = DEFAULT_STATUSES
    default_status: str = DEFAULT_STATUS

    def __post_init__(self):
        if self.default_status not in self.statuses:
            raise ConfigurationError(
                f"Default status {self.default_status!r} is not one of {list(self.statuses)}",
                {"default_status": self.default_status, "statuses": list(self.statuses)}
            )


@dataclass
class MySQLConfig:
    """MySQL database configuration."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "root"
    database: str = "openimis"
    plan_table: str = "social_protection_benefitplan"
    id_column: str = "UUID"
    extension_column: str = "Json_ext"


@dataclass
class FilterServiceConfig:
    """Custom filter metadata (GraphQL) service configuration."""
    graphql_url: str = "http://localhost:8000/api/graphql"
    auth_token: Optional[str] = None
    timeout_seconds: float = 10.0
    module_name: str = "individual"
    object_type_name: str = "Individual"


@dataclass
class AppConfig:
    """Main application configuration."""
    status: StatusConfig = field(default_factory=StatusConfig)
    mysql: MySQLConfig = field(default_factory=MySQLConfig)
    filter_service: FilterServiceConfig = field(default_factory=FilterServiceConfig)
    plans_file: str = "data/benefit_plans.json"
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _parse_statuses(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_STATUSES
    statuses = tuple(part.strip().upper() for part in raw.split(",") if part.strip())
    return statuses or DEFAULT_STATUSES


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ConfigurationError: If the default status is not a configured status
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    status_config = StatusConfig(
        statuses=_parse_statuses(os.getenv("BENEFICIARY_STATUSES")),
        default_status=os.getenv("DEFAULT_BENEFICIARY_STATUS", DEFAULT_STATUS).strip().upper()
    )

    mysql_config = MySQLConfig(
        host=os.getenv("MYSQL_HOST", "localhost"),
        port=int(os.getenv("MYSQL_PORT", "3306")),
        user=os.getenv("MYSQL_USER", "root"),
        password=os.getenv("MYSQL_PASSWORD", "root"),
        database=os.getenv("MYSQL_DATABASE", "openimis"),
        plan_table=os.getenv("MYSQL_PLAN_TABLE", "social_protection_benefitplan"),
        id_column=os.getenv("MYSQL_PLAN_ID_COLUMN", "UUID"),
        extension_column=os.getenv("MYSQL_PLAN_EXTENSION_COLUMN", "Json_ext")
    )

    filter_service_config = FilterServiceConfig(
        graphql_url=os.getenv("FILTER_SERVICE_URL", "http://localhost:8000/api/graphql"),
        auth_token=os.getenv("FILTER_SERVICE_TOKEN") or None,
        timeout_seconds=float(os.getenv("FILTER_SERVICE_TIMEOUT_SECONDS", "10.0")),
        module_name=os.getenv("FILTER_MODULE_NAME", "individual"),
        object_type_name=os.getenv("FILTER_OBJECT_TYPE_NAME", "Individual")
    )

    _config_instance = AppConfig(
        status=status_config,
        mysql=mysql_config,
        filter_service=filter_service_config,
        plans_file=os.getenv("PLANS_FILE", "data/benefit_plans.json"),
        log_level=os.getenv("LOG_LEVEL", "INFO")
    )

    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
