"""Pydantic models for the kernel's display protocol and execute replies."""

from typing import Any, Literal

from pydantic import BaseModel, Field

# Mapping from MIME type to content (string, list of strings, or JSON value)
MimeBundle = dict[str, Any]

StreamName = Literal["stdout", "stderr"]


class DisplayContent(BaseModel):
    """Content of a display_data or update_display_data message.

    Attributes:
        data: MIME bundle to render
        metadata: Per-bundle metadata forwarded to renderers
        transient: Transient fields; carries the display_id that later
            updates address
    """

    data: MimeBundle
    metadata: dict[str, Any] = Field(default_factory=dict)
    transient: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_display(
        cls,
        display_id: str,
        data: MimeBundle,
        metadata: dict[str, Any] | None = None,
    ) -> "DisplayContent":
        """Build content addressed to a display identifier."""
        return cls(data=data, metadata=metadata or {}, transient={"display_id": display_id})

    @property
    def display_id(self) -> str | None:
        return self.transient.get("display_id")


class StreamContent(BaseModel):
    """Content of a stream message (plain text on stdout or stderr)."""

    name: StreamName
    text: str


class DisplayOperation(BaseModel):
    """One operation sent to the display surface, in emission order."""

    kind: Literal["display_data", "update_display_data", "stream"]
    display: DisplayContent | None = None
    stream: StreamContent | None = None


class ExecuteReply(BaseModel):
    """Reply to an execute request.

    Attributes:
        status: "ok" or "error"
        execution_count: Execution counter for this request
        user_expressions: Present on ok replies
        ename: Error kind on error replies (ConfigurationError or AIError)
        evalue: Error message on error replies
        traceback: Always empty for AI errors
    """

    status: Literal["ok", "error"]
    execution_count: int
    user_expressions: dict[str, Any] | None = None
    ename: str | None = None
    evalue: str | None = None
    traceback: list[str] | None = None

    @classmethod
    def ok(cls, execution_count: int) -> "ExecuteReply":
        return cls(status="ok", execution_count=execution_count, user_expressions={})

    @classmethod
    def error(cls, execution_count: int, ename: str, evalue: str) -> "ExecuteReply":
        return cls(
            status="error",
            execution_count=execution_count,
            ename=ename,
            evalue=evalue,
            traceback=[],
        )

    def to_content(self) -> dict[str, Any]:
        """Serialize to the execute_reply message content."""
        return self.model_dump(exclude_none=True)
