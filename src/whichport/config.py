from __future__ import annotations

from pydantic import BaseModel, Field

class ToolSettings(BaseModel):
    command: str
    args: list[str] = Field(default_factory=list)

    def argv(self) -> list[str]:
        return [self.command, *self.args]

class CollectorSettings(BaseModel):
    # listen-only, numeric, TCP-only, no header, show processes
    ss: ToolSettings = Field(default_factory=lambda: ToolSettings(command="ss", args=["-lntpH"]))
    lsof: ToolSettings = Field(
        default_factory=lambda: ToolSettings(
            command="lsof",
            args=["-nP", "-iTCP", "-sTCP:LISTEN", "-FpcLnTu"],
        )
    )
    error_separator: str = " | "

class OutputSettings(BaseModel):
    json_output: bool = False
    verbose: bool = False
    table: bool = False
