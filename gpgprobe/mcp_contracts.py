# gpgprobe/mcp_contracts.py
from __future__ import annotations
from typing import Literal
from pydantic import BaseModel, Field

from .status import CheckResult, render


class CheckReport(BaseModel):
    key_id: str
    state: Literal["OK", "WARNING", "CRITICAL", "UNKNOWN"] = Field(..., examples=["WARNING"])
    code: int = Field(..., ge=0, le=3)
    message: str
    line: str = Field(..., examples=["WARNING: key 0xDEADBEEF expires in 5 days (2026-01-01T00:00:00Z)"])

    @classmethod
    def from_result(cls, key_id: str, result: CheckResult) -> "CheckReport":
        return cls(
            key_id=key_id,
            state=result.state.name,
            code=result.code,
            message=result.message,
            line=render(result),
        )
