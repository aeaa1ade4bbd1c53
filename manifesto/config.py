"""
Manifesto Enforcer Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
Nothing is required; every value has a safe default.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Static analysis ──
    max_function_statements: int = Field(
        default=50,
        description="Top-level statements allowed in a function body before it is flagged",
    )
    test_path_indicators: list[str] = Field(
        default=["test", "spec"],
        description="Path substrings that mark a file as test code (debug prints allowed)",
    )
    max_file_size_bytes: int = Field(
        default=500_000, description="Max source size accepted for scanning (bytes)"
    )
    diagnostics_debounce_ms: int = Field(
        default=500,
        description="Recommended host debounce window between edit-triggered re-scans",
    )

    # ── Self-monitoring ──
    metrics_capacity: int = Field(
        default=100, description="Performance samples kept per engine instance (FIFO)"
    )

    # ── Cache ──
    cache_ttl_seconds: int = Field(
        default=3600, description="Time-to-live for per-document diagnostic entries"
    )

    # ── Enforcement delegates ──
    test_command: str = Field(
        default="", description="Shell command that runs the workspace test suite"
    )
    coverage_command: str = Field(
        default="", description="Shell command that prints a coverage summary"
    )
    lint_command: str = Field(default="", description="Shell command that runs the linter")
    coverage_threshold: float = Field(
        default=80.0, description="Minimum total coverage percentage for commits"
    )
    test_timeout_seconds: int = Field(
        default=30, description="Timeout for each delegate command in seconds"
    )
    workspace_root: str = Field(
        default=".", description="Directory the delegate commands run in"
    )

    # ── Security ──
    encryption_key: str | None = Field(
        default=None,
        description="Secret for the sensitive data vault; random per process when unset",
    )

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    # ── Audit ──
    audit_log_path: str = Field(
        default="manifesto_audit.jsonl",
        description="Path to JSON-lines audit log of enforcement decisions",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance — imported by other modules
settings = Settings()
