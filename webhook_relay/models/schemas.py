from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from webhook_relay.relay.forwarder import ForwardResult
from webhook_relay.routing.credentials import mask_url_credentials


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"


class ReadyResponse(BaseModel):
    ready: bool
    routes: list[str]


class ConfigResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    port: int
    routes: dict[str, str]
    timeout_ms: int = Field(alias="timeoutMs")


class RelayResponse(BaseModel):
    """Body returned to the caller of a relayed request; status is always 200."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    forwarded: bool
    reason: str | None = None
    to: str | None = None
    target_status: int | None = Field(default=None, alias="targetStatus")

    @classmethod
    def from_result(cls, result: ForwardResult) -> "RelayResponse":
        if result.forwarded:
            return cls(
                forwarded=True,
                to=mask_url_credentials(result.target_url or ""),
                target_status=result.target_status,
            )
        if result.target_url is None:
            return cls(forwarded=False, reason=result.failure_reason)
        return cls(forwarded=False, target_status=result.target_status)
