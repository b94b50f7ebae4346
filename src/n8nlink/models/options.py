"""Client policy options."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ClientOptions(BaseModel):
    """Timeout and retry policy for the n8n client.

    Durations are in milliseconds, matching what n8n operators configure.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timeout: int = Field(default=30000, ge=1, description="Per-attempt timeout in ms")
    max_retries: int = Field(
        default=3, ge=1, alias="maxRetries", description="Maximum attempts per request"
    )
    retry_delay: int = Field(
        default=1000, ge=0, alias="retryDelay", description="Base backoff delay in ms"
    )
    production: bool = Field(
        default=False, description="Hide upstream error detail from callers"
    )
