"""
Probe-result records as the scanner writes them.

What this does:
- Mirrors the scanner's JSON (Host / Address / PortResults / MPTCPResults ...)
  as frozen pydantic models with snake_case attributes and the JSON keys as aliases
- Normalises the scanner's zero values: "" address -> None, null lists -> []

Nothing here talks to the network; records are read-only inputs for classify.py.
"""
from __future__ import annotations
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class MptcpAttempt(_Record):
    """One MP_CAPABLE SYN sent to a port and what came back."""
    no_mptcp_option: bool = Field(False, alias="NoMPTCPOption")
    wrong_version: bool = Field(False, alias="WrongVersion")
    wrong_receiver_key: bool = Field(False, alias="WrongReceiverKey")
    timeout: bool = Field(False, alias="Timeout")
    synack: bool = Field(False, alias="SYNACK")
    rst: bool = Field(False, alias="RST")
    sender_version: int = Field(0, alias="SenderVersion")
    receiver_version: int = Field(0, alias="ReceiverVersion")
    flags: int = Field(0, alias="Flags")


class PortResult(_Record):
    port: int = Field(0, alias="Port")
    tcp_connectable: bool = Field(False, alias="TCPConnectable")
    mptcp_results: List[MptcpAttempt] = Field(default_factory=list, alias="MPTCPResults")

    @field_validator("mptcp_results", mode="before")
    @classmethod
    def _null_attempts(cls, v: Any) -> Any:
        # scanner marshals a nil slice (unconnectable port) as null
        return [] if v is None else v


class HostRecord(_Record):
    host: str = Field("", alias="Host")
    address: Optional[str] = Field(None, alias="Address")
    port_results: List[PortResult] = Field(default_factory=list, alias="PortResults")

    @field_validator("address", mode="before")
    @classmethod
    def _empty_address(cls, v: Any) -> Any:
        # failed DNS lookups are written as ""
        return None if v == "" else v

    @field_validator("port_results", mode="before")
    @classmethod
    def _null_ports(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def resolved(self) -> bool:
        return self.address is not None

    def to_json(self) -> dict:
        """Dict using the scanner's JSON keys (for export)."""
        return self.model_dump(by_alias=True)
