"""Configuration system for the Prosperity engine.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults for projections and reports.

Usage:
    from prosperity_core.config import ProsperityConfig

    # Load from environment variables and .env file
    config = ProsperityConfig()

    # Access projection defaults
    print(config.projection.default_years_to_pay)
    print(config.projection.fin_multiplier)

    # Access report settings
    print(config.report.firm_name)
"""

import logging
from decimal import Decimal
from enum import Enum

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportFormat(str, Enum):
    """Supported report output formats."""

    TEXT = "text"
    MARKDOWN = "markdown"
    HTML = "html"
    PDF = "pdf"


class ProjectionSettings(BaseSettings):
    """Projection and analysis defaults.

    Environment Variables:
        PROSPERITY_PROJECTION_DEFAULT_YEARS_TO_PAY: Years used when a proposal omits them
        PROSPERITY_PROJECTION_DEFAULT_RETURN_PERCENTAGE: Return used when a proposal omits it
        PROSPERITY_PROJECTION_DAYS_PER_MONTH: Month length for goal deadlines
        PROSPERITY_PROJECTION_FIN_MULTIPLIER: Income multiple for the FIN
        PROSPERITY_PROJECTION_SAVINGS_RATE_TARGET: Savings rate (percent) below which to recommend saving more
        PROSPERITY_PROJECTION_DEBT_TO_ASSET_THRESHOLD: Debt-to-asset percent above which to recommend debt reduction
    """

    model_config = SettingsConfigDict(
        env_prefix="PROSPERITY_PROJECTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_years_to_pay: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Years to pay used when a proposal does not specify them",
    )
    default_return_percentage: Decimal = Field(
        default=Decimal("6"),
        ge=Decimal("-100"),
        le=Decimal("100"),
        description="Average annual return (percent) used when a proposal does not specify one",
    )
    days_per_month: int = Field(
        default=30,
        gt=0,
        le=31,
        description="Days counted as one month when computing months remaining on a goal",
    )
    fin_multiplier: Decimal = Field(
        default=Decimal("25"),
        gt=Decimal("0"),
        description="Multiple of total income that makes up the Financial Independence Number",
    )
    savings_rate_target: Decimal = Field(
        default=Decimal("20"),
        ge=Decimal("0"),
        le=Decimal("100"),
        description="Savings rate (percent of income) considered healthy",
    )
    debt_to_asset_threshold: Decimal = Field(
        default=Decimal("50"),
        ge=Decimal("0"),
        description="Debt-to-asset ratio (percent) above which debt reduction is recommended",
    )


class ReportSettings(BaseSettings):
    """Report rendering settings.

    Environment Variables:
        PROSPERITY_REPORT_FIRM_NAME: Firm name printed on reports
        PROSPERITY_REPORT_DEFAULT_FORMAT: Output format used when none is requested
        PROSPERITY_REPORT_INCLUDE_AUDIT_TRAIL: Append calculation steps to proposal reports
    """

    model_config = SettingsConfigDict(
        env_prefix="PROSPERITY_REPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    firm_name: str = Field(
        default="ProsperityFIN",
        description="Firm name printed in report headers and disclaimers",
    )
    default_format: ReportFormat = Field(
        default=ReportFormat.TEXT,
        description="Output format used when the caller does not request one",
    )
    include_audit_trail: bool = Field(
        default=False,
        description="Append the projection's calculation steps to proposal reports",
    )

    @field_validator("firm_name")
    @classmethod
    def validate_firm_name(cls, v: str) -> str:
        """Ensure firm name is not empty."""
        if not v or not v.strip():
            raise ValueError("Firm name cannot be empty")
        return v.strip()


class ProsperityConfig(BaseSettings):
    """Root configuration for the Prosperity engine.

    Environment Variables:
        PROSPERITY_ENV: Environment name (development, staging, production, test)
        PROSPERITY_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        # Load all configuration from environment
        config = ProsperityConfig()

        # Override specific settings
        config = ProsperityConfig(
            projection=ProjectionSettings(fin_multiplier=Decimal("30")),
            report=ReportSettings(firm_name="Acme Wealth"),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="PROSPERITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    projection: ProjectionSettings = Field(default_factory=ProjectionSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def configure_logging(config: ProsperityConfig) -> None:
    """Point structlog at the configured log level.

    Development and test environments get a console renderer; everything
    else logs JSON lines.
    """
    level = logging.getLevelName(config.log_level)
    renderer = (
        structlog.processors.JSONRenderer()
        if config.is_production or config.env == "staging"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )
