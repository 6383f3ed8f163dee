"""
Request and Response Envelopes for the Pulsar bridge.

Every exchange with the host is one RequestEnvelope out and one
ResponseEnvelope back. RequestKind is the closed set of operation kinds the
client knows; its values are the exact wire strings the host matches on
(including the host's inconsistent casing).

The host encodes booleans as "TRUE"/"FALSE". to_host_bool() and
from_host_bool() are the only places that encoding is handled; the rest of
the package works with native bools.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pulsar_bridge.errors import InvalidArgumentError

HOST_TRUE = "TRUE"
HOST_FALSE = "FALSE"


class RequestKind(str, Enum):
    """Operation kinds understood by the host, valued by their wire name."""

    # Records
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SELECT = "select"
    UPDATE_QUERY = "updateQuery"
    DELETE_BATCH = "deletebatch"

    # Schema and layout
    GET_SOBJECT_SCHEMA = "getSObjectSchema"
    GET_LAYOUT = "getLayout"
    GET_LAYOUT_SECTIONS = "getLayoutSections"
    GET_LAYOUT_FIELDS = "getLayoutFields"
    GET_COMPACT_LAYOUT_FIELDS = "getCompactLayoutFields"
    GET_PICKLIST = "getPicklist"
    GET_UNFILTERED_PICKLIST = "getUnfilteredPicklist"
    LISTVIEW_INFO = "listviewInfo"
    LISTVIEW_METADATA = "listviewmetadata"

    # Sync and connectivity
    SYNC_DATA = "syncdata"
    INTERRUPT_SYNC = "interruptsync"
    GET_AUTOSYNC_STATUS = "getAutosyncStatus"
    SET_AUTOSYNC_STATUS = "setAutosyncStatus"
    GET_ONLINE_STATUS = "getOnlineStatus"
    SET_ONLINE_STATUS = "setOnlineStatus"
    GET_NETWORK_STATUS = "getNetworkStatus"

    # Files
    CREATE_SF_FILE = "createSFFile"
    CREATE_SF_FILE_FROM_FILE_PATH = "createSFFileFromFilePath"
    CREATE_SF_FILE_FROM_CAMERA = "createSFFileFromCamera"
    CREATE_SF_FILE_BATCH = "createSFFileBatch"
    CREATE_SF_FILE_FROM_FILE_PATH_BATCH = "createSFFileFromFilePathBatch"
    READ_SF_FILE = "readSFFile"
    DELETE_SF_FILE = "deleteSFFile"
    QUERY_CONTENT = "queryContent"
    GET_CONTENT_URL = "getContentUrl"
    SAVE_AS = "saveAs"

    # Settings, identity, device
    GET_SETTING = "getSetting"
    GET_SETTING_ATTACHMENT = "getSettingAttachment"
    USER_INFO = "userInfo"
    USER_PHOTO = "userPhoto"
    GET_PLATFORM = "getPlatform"
    GET_PLATFORM_FEATURES = "getPlatformFeatures"
    GET_DEV_SERVER_ENABLED = "getDevServerEnabled"
    GET_LOCATION = "getLocation"
    GET_CUSTOM_LABELS = "getCustomLabels"
    LOG_MESSAGE = "logMessage"

    # Collaboration
    CHATTER_GET_FEED = "chattergetfeed"
    CHATTER_POST_FEED = "chatterpostfeed"
    MAIL = "mail"

    # Field service
    GET_FSL_TEMPLATE = "getfsltemplate"
    EXECUTE_FSL_FLOW = "executeFSLFlow"
    CREATE_SERVICE_REPORT_FROM_FILE_PATH = "createservicereportfromfilepath"

    # UI navigation
    VIEW_LIST = "viewList"
    VIEW_OBJECT = "viewObject"
    VIEW_RELATED = "viewRelated"
    SHOW_CREATE = "showCreate"
    LOOKUP_OBJECT = "lookupObject"
    SCAN_BARCODE = "scanBarcode"
    EXECUTE_QUICK_ACTION = "executeQuickAction"
    CAMERA_PHOTO = "cameraPhoto"
    CAMERA_PHOTO_PICKER = "cameraPhotoPicker"
    FILE_PICKER = "filePicker"
    DISPLAY_URL = "displayUrl"
    SET_LEAVE_PAGE_MESSAGE = "setLeavePageMessage"
    EXIT = "exit"


@dataclass(frozen=True, slots=True)
class RequestEnvelope:
    """
    One request to the host.

    Attributes:
        kind: Operation kind
        object: SObject API name the operation targets, if any
        field_name: Field API name, for field-scoped operations
        args: Out-of-band arguments (e.g. allowEditOnFailure)
        data: Operation payload; None means the key is omitted on the wire
    """

    kind: RequestKind
    object: str | None = None
    field_name: str | None = None
    args: dict[str, Any] | None = None
    data: Any = None

    def to_wire(self) -> dict[str, Any]:
        """Convert to the host's request format, omitting absent keys."""
        wire: dict[str, Any] = {"type": self.kind.value}
        if self.object is not None:
            wire["object"] = self.object
        if self.field_name is not None:
            wire["fieldName"] = self.field_name
        if self.args is not None:
            wire["args"] = self.args
        if self.data is not None:
            wire["data"] = self.data
        return wire


@dataclass(frozen=True, slots=True)
class ResponseEnvelope:
    """One response from the host. kind == "error" signals failure."""

    kind: str
    data: Any = None

    @property
    def is_error(self) -> bool:
        return self.kind == "error"

    @classmethod
    def from_wire(cls, payload: Any) -> ResponseEnvelope:
        """Build from the host's {"type": ..., "data": ...} mapping."""
        if not isinstance(payload, dict):
            return cls(kind="error", data=f"Malformed response envelope: {type(payload).__name__}")
        return cls(kind=str(payload.get("type", "")), data=payload.get("data"))


def to_host_bool(value: bool) -> str:
    """Encode a native bool for the host."""
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"Expected a boolean, got {type(value).__name__}")
    return HOST_TRUE if value else HOST_FALSE


def from_host_bool(value: Any) -> bool:
    """Decode a host boolean. Anything other than "TRUE" (or True) is False."""
    if isinstance(value, bool):
        return value
    return value == HOST_TRUE


__all__ = [
    "HOST_FALSE",
    "HOST_TRUE",
    "RequestEnvelope",
    "RequestKind",
    "ResponseEnvelope",
    "from_host_bool",
    "to_host_bool",
]
