"""Content schemas for the shell and control channels.

These describe the shape of each message body and nothing more; what a
kernel does on receipt of a request is up to the kernel.
"""

from typing import Any, ClassVar, Dict, List, Optional, Union

import msgspec

from .content import ContentCodec


class Content(msgspec.Struct, omit_defaults=True):
    """Common base for the schemas below."""


# Requests


class KernelInfoRequest(Content):
    msg_type: ClassVar[str] = "kernel_info_request"


class ExecuteRequest(Content):
    msg_type: ClassVar[str] = "execute_request"

    code: str
    silent: bool = False
    store_history: bool = True
    user_expressions: Dict[str, str] = {}
    allow_stdin: bool = True
    stop_on_error: bool = True


class InspectRequest(Content):
    msg_type: ClassVar[str] = "inspect_request"

    code: str
    cursor_pos: int
    detail_level: int = 0


class CompleteRequest(Content):
    msg_type: ClassVar[str] = "complete_request"

    code: str
    cursor_pos: int


class IsCompleteRequest(Content):
    msg_type: ClassVar[str] = "is_complete_request"

    code: str


class HistoryRequest(Content):
    msg_type: ClassVar[str] = "history_request"

    output: bool = False
    raw: bool = True
    hist_access_type: str = "tail"
    session: Optional[int] = None
    start: Optional[int] = None
    stop: Optional[int] = None
    n: Optional[int] = None
    pattern: Optional[str] = None
    unique: bool = False


class CommInfoRequest(Content):
    msg_type: ClassVar[str] = "comm_info_request"

    target_name: Optional[str] = None


class ShutdownRequest(Content):
    msg_type: ClassVar[str] = "shutdown_request"

    restart: bool = False


class InterruptRequest(Content):
    msg_type: ClassVar[str] = "interrupt_request"


# Replies always carry every field, defaults included. A reply with status
# 'error' also carries ename, evalue and traceback; those stay off the wire
# while unset.


class Reply(Content, omit_defaults=False):
    status: str = "ok"
    ename: Union[str, msgspec.UnsetType] = msgspec.UNSET
    evalue: Union[str, msgspec.UnsetType] = msgspec.UNSET
    traceback: Union[List[str], msgspec.UnsetType] = msgspec.UNSET


class KernelInfoReply(Reply):
    msg_type: ClassVar[str] = "kernel_info_reply"

    protocol_version: str = ""
    implementation: str = ""
    implementation_version: str = ""
    language_info: Dict[str, Any] = {}
    banner: str = ""
    help_links: List[Dict[str, str]] = []


class ExecuteReply(Reply):
    msg_type: ClassVar[str] = "execute_reply"

    execution_count: int = 0
    payload: List[Dict[str, Any]] = []
    user_expressions: Dict[str, Any] = {}


class InspectReply(Reply):
    msg_type: ClassVar[str] = "inspect_reply"

    found: bool = False
    data: Dict[str, Any] = {}
    metadata: Dict[str, Any] = {}


class CompleteReply(Reply):
    msg_type: ClassVar[str] = "complete_reply"

    matches: List[str] = []
    cursor_start: int = 0
    cursor_end: int = 0
    metadata: Dict[str, Any] = {}


class IsCompleteReply(Reply):
    msg_type: ClassVar[str] = "is_complete_reply"

    indent: str = ""


class HistoryReply(Reply):
    msg_type: ClassVar[str] = "history_reply"

    history: List[Any] = []


class CommInfoReply(Reply):
    msg_type: ClassVar[str] = "comm_info_reply"

    comms: Dict[str, Dict[str, str]] = {}


class ShutdownReply(Reply):
    msg_type: ClassVar[str] = "shutdown_reply"

    restart: bool = False


class InterruptReply(Reply):
    msg_type: ClassVar[str] = "interrupt_reply"


requests = ContentCodec(
    KernelInfoRequest,
    ExecuteRequest,
    InspectRequest,
    CompleteRequest,
    IsCompleteRequest,
    HistoryRequest,
    CommInfoRequest,
    ShutdownRequest,
    InterruptRequest,
)

replies = ContentCodec(
    KernelInfoReply,
    ExecuteReply,
    InspectReply,
    CompleteReply,
    IsCompleteReply,
    HistoryReply,
    CommInfoReply,
    ShutdownReply,
    InterruptReply,
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
