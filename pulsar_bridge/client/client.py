"""
Pulsar Client.

Typed wrappers over the host's JSAPI operations. Every wrapper validates
its arguments before anything is sent, builds one RequestEnvelope, and
sends it through the session's transport channel.

Usage:
    session = PulsarSession(environment)
    client = await PulsarClient(session).connect()

    accounts = await client.read("Account", {"Name": "Acme"})
    account_id = await client.create("Account", {"Name": "Globex"})
    owner = await client.resolve_soql_field_path(contact, "Owner.Name", "Contact")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pulsar_bridge.bridge.envelope import (
    RequestEnvelope,
    RequestKind,
    from_host_bool,
    to_host_bool,
)
from pulsar_bridge.errors import InvalidArgumentError, ResponseShapeError
from pulsar_bridge.resolver import FieldPathResolver
from pulsar_bridge.schemas import SObjectSchema
from pulsar_bridge.utils.json_parser import ResponseShape, describe_kind, normalize_response

if TYPE_CHECKING:
    from pulsar_bridge.bridge.protocol import HostHandler
    from pulsar_bridge.bridge.session import PulsarSession

logger = logging.getLogger(__name__)

SYNC_OPTION_KEYS = (
    "singleObjectSyncEnabled",
    "rootObjectId",
    "parentIdFieldList",
    "childRelationshipList",
    "pushChangesSyncEnabled",
    "useComposite",
    "useCompositeGraph",
)


# =============================================================================
# Argument checks
# =============================================================================


def _require_str(value: Any, operation: str, label: str) -> str:
    if not value or not isinstance(value, str):
        raise InvalidArgumentError(f"{operation} requires a valid {label} string.")
    return value


def _require_list(value: Any, operation: str, label: str, item_type: type | tuple[type, ...]) -> list:
    if (
        not isinstance(value, (list, tuple))
        or not value
        or not all(isinstance(item, item_type) for item in value)
    ):
        raise InvalidArgumentError(f"{operation} requires a non-empty list of {label}.")
    return list(value)


def _record_type_data(
    record_type_id: str | None,
    record_type_name: str | None,
    *,
    prefer_name: bool,
) -> dict[str, Any]:
    """Pick the record type selector; only one is ever sent."""
    if prefer_name and record_type_name:
        return {"RecordTypeName": record_type_name}
    if record_type_id:
        return {"RecordTypeId": record_type_id}
    if record_type_name:
        return {"RecordTypeName": record_type_name}
    return {}


def _compact(**values: Any) -> dict[str, Any]:
    """Keep only truthy values."""
    return {key: value for key, value in values.items() if value}


# =============================================================================
# Client
# =============================================================================


class PulsarClient:
    """
    Async client for the Pulsar JSAPI.

    Provides methods for:
    - Record CRUD and local SQLite queries
    - Schema, layout, picklist and list view metadata
    - Sync control and connectivity status
    - Salesforce Files
    - Settings, user and device information
    - Chatter, mail and Field Service
    - Native UI navigation

    All state lives in the session; the client only builds requests.
    """

    def __init__(self, session: PulsarSession):
        self._session = session
        self._resolver = FieldPathResolver(self.get_sobject_schema, self.read)

    @property
    def session(self) -> PulsarSession:
        return self._session

    @property
    def is_connected(self) -> bool:
        return self._session.is_connected

    async def connect(self) -> PulsarClient:
        """Run the session handshake and return self."""
        await self._session.connect()
        return self

    async def _send(
        self,
        kind: RequestKind,
        *,
        object: str | None = None,
        field_name: str | None = None,
        args: dict[str, Any] | None = None,
        data: Any = None,
    ) -> Any:
        return await self._session.send(
            RequestEnvelope(kind, object=object, field_name=field_name, args=args, data=data)
        )

    # =========================================================================
    # Host-pushed events
    # =========================================================================

    def register_handler(self, name: str, handler: HostHandler) -> None:
        """Subscribe handler to a host-pushed event (e.g. syncDataUpdate)."""
        self._session.register_handler(name, handler)

    def deregister_handler(self, name: str) -> None:
        """Remove the subscription for a host-pushed event."""
        self._session.deregister_handler(name)

    # =========================================================================
    # Records
    # =========================================================================

    async def read(self, object_name: str, filters: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """
        Read records by exact-match field filters.

        All field values come back as strings.
        """
        return await self._send(RequestKind.READ, object=object_name, data=dict(filters or {}))

    async def create(
        self,
        object_name: str,
        fields: Mapping[str, Any] | None = None,
        args: Mapping[str, Any] | None = None,
    ) -> str:
        """
        Create a record.

        Args:
            object_name: SObject API name
            fields: Field values for the new record
            args: Optional arguments (e.g. allowEditOnFailure)

        Returns:
            Id of the created record
        """
        return await self._send(
            RequestKind.CREATE,
            object=object_name,
            data=dict(fields or {}),
            args=dict(args or {}),
        )

    async def update(self, object_name: str, fields: Mapping[str, Any]) -> str:
        """Update a record; fields must include its Id."""
        if not isinstance(fields, Mapping) or not fields.get("Id"):
            raise InvalidArgumentError("update requires an 'Id' field.")
        return await self._send(RequestKind.UPDATE, object=object_name, data=dict(fields))

    async def delete(self, object_name: str, record_id: str) -> str:
        """Delete a record by Id."""
        if not record_id:
            raise InvalidArgumentError("delete requires an 'id' value.")
        return await self._send(RequestKind.DELETE, object=object_name, data={"Id": record_id})

    async def select(self, object_name: str, query: str) -> list[dict[str, Any]]:
        """Run a read-only SQLite SELECT against the local database."""
        _require_str(query, "select", "SQLite query")
        return await self._send(RequestKind.SELECT, object=object_name, data={"query": query})

    async def update_query(self, object_name: str, query: str) -> Any:
        """Run a SQLite UPDATE against the local database."""
        _require_str(object_name, "update_query", "objectName")
        _require_str(query, "update_query", "SQLite query")
        return await self._send(RequestKind.UPDATE_QUERY, object=object_name, data={"query": query})

    async def delete_batch(self, object_name: str, ids: Sequence[str]) -> Any:
        """Delete several records of one type."""
        _require_str(object_name, "delete_batch", "objectName")
        id_list = _require_list(ids, "delete_batch", "string Ids", str)
        return await self._send(
            RequestKind.DELETE_BATCH,
            object=object_name,
            data={"objectIdList": id_list},
        )

    # =========================================================================
    # Schema and layout
    # =========================================================================

    async def get_sobject_schema(self, object_name: str) -> SObjectSchema:
        """
        Describe an SObject type.

        Raises:
            ResponseShapeError: If the describe payload is undecodable or invalid
        """
        response = await self._send(RequestKind.GET_SOBJECT_SCHEMA, object=object_name, data={})
        describe = normalize_response(ResponseShape.OBJECT, response, operation="get_sobject_schema")
        try:
            return SObjectSchema.model_validate(describe)
        except ValidationError as e:
            raise ResponseShapeError(
                f"Invalid describe for {object_name}: {e.error_count()} validation error(s)",
                expected="object",
                received=describe_kind(describe),
                operation="get_sobject_schema",
            ) from e

    async def get_layout(
        self,
        object_name: str,
        record_type_id: str | None = None,
        record_type_name: str | None = None,
    ) -> dict[str, Any]:
        """Full DescribeLayout for an object; record type Id wins over name."""
        response = await self._send(
            RequestKind.GET_LAYOUT,
            object=object_name,
            data=_record_type_data(record_type_id, record_type_name, prefer_name=False),
        )
        return normalize_response(ResponseShape.OBJECT, response, operation="get_layout")

    async def get_layout_sections(
        self,
        object_name: str,
        record_type_id: str | None = None,
        record_type_name: str | None = None,
        layout_mode: str | None = "display",
    ) -> list[dict[str, Any]]:
        """Layout sections for an object; record type name wins over Id."""
        _require_str(object_name, "get_layout_sections", "objectName")
        data = _record_type_data(record_type_id, record_type_name, prefer_name=True)
        if layout_mode:
            data["LayoutMode"] = layout_mode
        response = await self._send(RequestKind.GET_LAYOUT_SECTIONS, object=object_name, data=data)
        return normalize_response(ResponseShape.ARRAY, response, operation="get_layout_sections")

    async def get_layout_fields(
        self,
        object_name: str,
        record_type_id: str | None = None,
        record_type_name: str | None = None,
        layout_mode: str | None = "display",
    ) -> list[dict[str, Any]]:
        """Flattened layout fields for an object."""
        _require_str(object_name, "get_layout_fields", "objectName")
        data = _record_type_data(record_type_id, record_type_name, prefer_name=True)
        if layout_mode:
            data["LayoutMode"] = layout_mode
        response = await self._send(RequestKind.GET_LAYOUT_FIELDS, object=object_name, data=data)
        return normalize_response(ResponseShape.ARRAY, response, operation="get_layout_fields")

    async def get_compact_layout_fields(
        self,
        object_name: str,
        record_type_id: str | None = None,
        record_type_name: str | None = None,
    ) -> list[str]:
        """Field names of the object's compact layout."""
        _require_str(object_name, "get_compact_layout_fields", "objectName")
        data = {
            "ObjectType": object_name,
            **_record_type_data(record_type_id, record_type_name, prefer_name=True),
        }
        response = await self._send(RequestKind.GET_COMPACT_LAYOUT_FIELDS, object=object_name, data=data)
        if not isinstance(response, list):
            raise ResponseShapeError(
                "Unexpected response format. Expected array of field names.",
                expected="array",
                received=describe_kind(response),
                operation="get_compact_layout_fields",
            )
        return response

    async def get_picklist(
        self,
        object_name: str,
        field_name: str,
        record_type_id: str | None = None,
        controller_field_name: str | None = None,
        controller_field_value: str | None = None,
    ) -> list[dict[str, Any]]:
        """Picklist values, filtered by record type and controlling field."""
        data = _compact(RecordTypeId=record_type_id)
        if controller_field_name and controller_field_value:
            data[controller_field_name] = controller_field_value
        return await self._send(
            RequestKind.GET_PICKLIST,
            object=object_name,
            field_name=field_name,
            data=data,
        )

    async def get_unfiltered_picklist(
        self,
        object_name: str,
        field_name: str,
        record_type_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Every picklist value regardless of controlling field."""
        _require_str(object_name, "get_unfiltered_picklist", "objectName")
        _require_str(field_name, "get_unfiltered_picklist", "fieldName")
        return await self._send(
            RequestKind.GET_UNFILTERED_PICKLIST,
            object=object_name,
            field_name=field_name,
            data=_compact(RecordTypeId=record_type_id),
        )

    async def listview_info(self, object_name: str) -> list[dict[str, Any]]:
        """List views available for an object."""
        _require_str(object_name, "listview_info", "objectName")
        return await self._send(RequestKind.LISTVIEW_INFO, object=object_name, data={})

    async def listview_metadata(self, object_name: str, listview_id: str) -> dict[str, Any]:
        """Columns and filter metadata of one list view."""
        _require_str(object_name, "listview_metadata", "objectName")
        _require_str(listview_id, "listview_metadata", "listviewId")
        return await self._send(
            RequestKind.LISTVIEW_METADATA,
            object=object_name,
            data={"listviewid": listview_id},
        )

    async def resolve_soql_field_path(
        self,
        record: Mapping[str, Any],
        path: str,
        sobject_type: str,
    ) -> Any:
        """
        Resolve a dotted relationship path (e.g. "Owner.Name") against record.

        Returns None if any relationship along the way is missing.
        """
        return await self._resolver.resolve_path(record, path, sobject_type)

    # =========================================================================
    # Sync and connectivity
    # =========================================================================

    async def sync_data(self, options: Mapping[str, Any] | None = None) -> Any:
        """
        Start a sync. Unknown option keys are not forwarded.

        Known options: singleObjectSyncEnabled, rootObjectId,
        parentIdFieldList, childRelationshipList, pushChangesSyncEnabled,
        useComposite, useCompositeGraph.
        """
        options = options or {}
        data = {key: options[key] for key in SYNC_OPTION_KEYS if key in options}
        dropped = set(options) - set(data)
        if dropped:
            logger.debug(f"[pulsar:client] sync_data ignoring unknown options: {sorted(dropped)}")
        return await self._send(RequestKind.SYNC_DATA, data=data)

    async def interrupt_sync(self) -> bool:
        """Stop a running sync."""
        response = await self._send(RequestKind.INTERRUPT_SYNC, data={})
        if isinstance(response, dict) and "success" in response:
            return bool(response["success"])
        raise ResponseShapeError(
            "Unexpected response format.",
            expected="object",
            received=describe_kind(response),
            operation="interrupt_sync",
        )

    async def get_autosync_status(self) -> bool:
        response = await self._send(RequestKind.GET_AUTOSYNC_STATUS, data={})
        return from_host_bool(response)

    async def set_autosync_status(self, enabled: bool) -> bool:
        if not isinstance(enabled, bool):
            raise InvalidArgumentError("set_autosync_status requires a boolean parameter.")
        response = await self._send(RequestKind.SET_AUTOSYNC_STATUS, data=to_host_bool(enabled))
        return from_host_bool(response)

    async def get_online_status(self) -> bool:
        """Whether the app is in online mode."""
        response = await self._send(RequestKind.GET_ONLINE_STATUS)
        return from_host_bool(response)

    async def set_online_status(self, online: bool) -> bool:
        """Switch between online and offline mode."""
        if not isinstance(online, bool):
            raise InvalidArgumentError("set_online_status requires a boolean parameter.")
        response = await self._send(RequestKind.SET_ONLINE_STATUS, data=to_host_bool(online))
        return from_host_bool(response)

    async def get_network_status(self) -> Any:
        return await self._send(RequestKind.GET_NETWORK_STATUS)

    # =========================================================================
    # Files
    # =========================================================================

    async def create_sf_file(
        self,
        parent_id: str,
        name: str,
        body: str,
        *,
        content_type: str | None = None,
        network_id: str | None = None,
        **custom_fields: Any,
    ) -> Any:
        """Create a Salesforce File from base64 content."""
        _require_str(parent_id, "create_sf_file", "parentId")
        _require_str(name, "create_sf_file", "file name")
        _require_str(body, "create_sf_file", "base64-encoded body")
        data = {
            "ParentId": parent_id,
            "Name": name,
            "Body": body,
            **_compact(ContentType=content_type, NetworkId=network_id),
            **custom_fields,
        }
        return await self._send(RequestKind.CREATE_SF_FILE, data=data)

    async def create_sf_file_from_file_path(
        self,
        parent_id: str,
        file_path: str,
        *,
        name: str | None = None,
        content_type: str | None = None,
        network_id: str | None = None,
        **custom_fields: Any,
    ) -> Any:
        """Create a Salesforce File from a file on the device."""
        _require_str(parent_id, "create_sf_file_from_file_path", "parentId")
        _require_str(file_path, "create_sf_file_from_file_path", "filePath")
        data = {
            "ParentId": parent_id,
            "FilePath": file_path,
            **_compact(Name=name, ContentType=content_type, NetworkId=network_id),
            **custom_fields,
        }
        return await self._send(RequestKind.CREATE_SF_FILE_FROM_FILE_PATH, data=data)

    async def create_sf_file_from_camera(
        self,
        parent_id: str,
        *,
        name: str | None = None,
        network_id: str | None = None,
        **custom_fields: Any,
    ) -> Any:
        """Take a photo and store it as a Salesforce File."""
        _require_str(parent_id, "create_sf_file_from_camera", "parentId")
        data = {
            "ParentId": parent_id,
            **_compact(Name=name, NetworkId=network_id),
            **custom_fields,
        }
        return await self._send(RequestKind.CREATE_SF_FILE_FROM_CAMERA, data=data)

    async def create_sf_file_batch(self, files: Sequence[Mapping[str, Any]]) -> Any:
        files = _require_list(files, "create_sf_file_batch", "file objects", Mapping)
        return await self._send(RequestKind.CREATE_SF_FILE_BATCH, data=[dict(f) for f in files])

    async def create_sf_file_from_file_path_batch(self, files: Sequence[Mapping[str, Any]]) -> Any:
        files = _require_list(files, "create_sf_file_from_file_path_batch", "file objects", Mapping)
        return await self._send(
            RequestKind.CREATE_SF_FILE_FROM_FILE_PATH_BATCH,
            data=[dict(f) for f in files],
        )

    async def read_sf_file(
        self,
        file_id: str,
        return_base64_data: bool = False,
        download_version_data: bool = True,
    ) -> Any:
        _require_str(file_id, "read_sf_file", "fileId")
        return await self._send(
            RequestKind.READ_SF_FILE,
            data={
                "Id": file_id,
                "ReturnBase64Data": return_base64_data,
                "DownloadVersionData": download_version_data,
            },
        )

    async def delete_sf_file(self, document_ids: Sequence[str]) -> bool:
        """
        Delete Salesforce Files by ContentDocument Id.

        Returns:
            True once the host confirms

        Raises:
            ResponseShapeError: If the host answer is not a success marker
        """
        id_list = _require_list(document_ids, "delete_sf_file", "ContentDocument Id strings", str)
        response = await self._send(RequestKind.DELETE_SF_FILE, data={"documentIdList": id_list})
        if isinstance(response, dict) and response.get("success") is True:
            return True
        # Older hosts answer with a bare "success" string.
        if isinstance(response, str) and response.lower() == "success":
            return True
        raise ResponseShapeError(
            "Unexpected response.",
            expected="success",
            received=describe_kind(response),
            operation="delete_sf_file",
        )

    async def query_content(self, content_filter: str, download_version_data: bool = True) -> list[dict[str, Any]]:
        """Query ContentDocuments with a SQLite filter."""
        _require_str(content_filter, "query_content", "SQLite filter")
        return await self._send(
            RequestKind.QUERY_CONTENT,
            data={"filter": content_filter, "DownloadVersionData": download_version_data},
        )

    async def get_content_url(self, *, content_id: str | None = None, title: str | None = None) -> Any:
        if not content_id and not title:
            raise InvalidArgumentError("get_content_url requires at least one of Id or Title.")
        return await self._send(RequestKind.GET_CONTENT_URL, data=_compact(Id=content_id, Title=title))

    async def save_as(self, filename: str, **options: Any) -> str:
        """
        Save content to a file on the device.

        Returns:
            Path of the saved file
        """
        _require_str(filename, "save_as", "filename")
        response = await self._send(RequestKind.SAVE_AS, data={"filename": filename, **options})
        if isinstance(response, dict) and "FilePath" in response:
            return response["FilePath"]
        raise ResponseShapeError(
            "Unexpected response.",
            expected="object",
            received=describe_kind(response),
            operation="save_as",
        )

    # =========================================================================
    # Settings, identity, device
    # =========================================================================

    async def get_setting(self, key: str) -> Any:
        _require_str(key, "get_setting", "key")
        return await self._send(RequestKind.GET_SETTING, data={"key": key})

    async def get_setting_attachment(self, key: str) -> Any:
        _require_str(key, "get_setting_attachment", "key")
        return await self._send(RequestKind.GET_SETTING_ATTACHMENT, data={"key": key})

    async def user_info(self) -> dict[str, Any]:
        return await self._send(RequestKind.USER_INFO, data={})

    async def user_photo(self) -> Any:
        return await self._send(RequestKind.USER_PHOTO, data={})

    async def get_platform(self) -> Any:
        return await self._send(RequestKind.GET_PLATFORM, data={})

    async def get_platform_features(self) -> Any:
        return await self._send(RequestKind.GET_PLATFORM_FEATURES)

    async def get_dev_server_enabled(self, doc_id: str | None = None) -> bool:
        response = await self._send(
            RequestKind.GET_DEV_SERVER_ENABLED,
            args=_compact(docId=doc_id),
            data={},
        )
        return from_host_bool(response)

    async def get_location(self, location_accuracy: str = "Medium") -> dict[str, Any]:
        return await self._send(RequestKind.GET_LOCATION, data={"locationAccuracy": location_accuracy})

    async def get_custom_labels(self, label_names: Sequence[str], locale: str | None = None) -> dict[str, str]:
        names = _require_list(label_names, "get_custom_labels", "label names", str)
        return await self._send(
            RequestKind.GET_CUSTOM_LABELS,
            data={"labelNames": names, **_compact(locale=locale)},
        )

    async def log_message(self, message: str, level: str = "info") -> Any:
        """Write to the host's log."""
        _require_str(message, "log_message", "message")
        return await self._send(RequestKind.LOG_MESSAGE, data={"message": message, "level": level})

    # =========================================================================
    # Collaboration
    # =========================================================================

    async def chatter_get_feed(
        self,
        parent_id: str,
        *,
        after_date: str | None = None,
        before_date: str | None = None,
        order_by: str | None = None,
    ) -> list[dict[str, Any]]:
        """FeedItems posted on a record."""
        _require_str(parent_id, "chatter_get_feed", "parentId")
        data = {"ParentId": parent_id}
        if after_date:
            data["@@after_date"] = after_date
        if before_date:
            data["@@before_date"] = before_date
        if order_by:
            data["orderBy"] = order_by
        response = await self._send(RequestKind.CHATTER_GET_FEED, data=data)
        if not isinstance(response, list):
            raise ResponseShapeError(
                "Unexpected response. Expected an array of FeedItem objects.",
                expected="array",
                received=describe_kind(response),
                operation="chatter_get_feed",
            )
        return response

    async def chatter_post_feed(
        self,
        message: str,
        parent_id: str,
        parent_feed_item_id: str | None = None,
    ) -> None:
        """Post to a record's feed, or comment on a feed item."""
        if not message or not isinstance(message, str) or not parent_id or not isinstance(parent_id, str):
            raise InvalidArgumentError("chatter_post_feed requires a message and parentId.")
        await self._send(
            RequestKind.CHATTER_POST_FEED,
            data={
                "Message": message,
                "Parent": parent_id,
                **_compact(ParentFeedItem=parent_feed_item_id),
            },
        )

    async def mail(
        self,
        to: Sequence[str] | None = None,
        cc: Sequence[str] | None = None,
        attach: Sequence[str] | None = None,
        subject: str | None = None,
        body: str | None = None,
    ) -> Any:
        """Open the device mail composer."""
        data: dict[str, Any] = {}
        for key, value in (("to", to), ("cc", cc), ("attach", attach)):
            if isinstance(value, (list, tuple)) and value:
                data[key] = list(value)
        for key, value in (("subject", subject), ("body", body)):
            if isinstance(value, str) and value:
                data[key] = value
        return await self._send(RequestKind.MAIL, data=data)

    # =========================================================================
    # Field Service
    # =========================================================================

    async def get_fsl_template(self, template_id: str | None = None, template_name: str | None = None) -> Any:
        data = {}
        if isinstance(template_id, str):
            data["TemplateId"] = template_id
        elif isinstance(template_name, str):
            data["TemplateName"] = template_name
        return await self._send(RequestKind.GET_FSL_TEMPLATE, data=data)

    async def execute_fsl_flow(
        self,
        flow_name: str | None = None,
        flow_id: str | None = None,
        action_label: str | None = None,
        record_id: str | None = None,
        user_id: str | None = None,
        parent_id: str | None = None,
    ) -> Any:
        if not flow_name and not flow_id:
            raise InvalidArgumentError("execute_fsl_flow requires either flowName or flowId.")
        return await self._send(
            RequestKind.EXECUTE_FSL_FLOW,
            data=_compact(
                FlowId=flow_id,
                FlowName=flow_name,
                ActionLabel=action_label,
                Id=record_id,
                UserId=user_id,
                ParentId=parent_id,
            ),
        )

    async def create_service_report_from_file_path(
        self,
        parent_id: str,
        file_path: str,
        template_id: str,
        document_name: str,
        content_type: str,
    ) -> Any:
        operation = "create_service_report_from_file_path"
        _require_str(parent_id, operation, "parentId")
        _require_str(file_path, operation, "filePath")
        _require_str(template_id, operation, "templateId")
        _require_str(document_name, operation, "documentName")
        _require_str(content_type, operation, "contentType")
        return await self._send(
            RequestKind.CREATE_SERVICE_REPORT_FROM_FILE_PATH,
            data={
                "ParentId": parent_id,
                "FilePath": file_path,
                "TemplateId": template_id,
                "DocumentName": document_name,
                "ContentType": content_type,
            },
        )

    # =========================================================================
    # UI navigation
    # =========================================================================

    async def view_list(self, object_name: str, listview_id: str | None = None) -> Any:
        return await self._send(
            RequestKind.VIEW_LIST,
            object=object_name,
            data=_compact(listViewId=listview_id),
        )

    async def view_object(self, object_name: str, record_id: str, edit_mode: bool = False) -> Any:
        """Open the native record view, optionally in edit mode."""
        _require_str(object_name, "view_object", "objectName")
        _require_str(record_id, "view_object", "Id")
        if not isinstance(edit_mode, bool):
            raise InvalidArgumentError("view_object requires a boolean edit_mode.")
        return await self._send(
            RequestKind.VIEW_OBJECT,
            object=object_name,
            data={"Id": record_id, "editmode": to_host_bool(edit_mode)},
        )

    async def view_related(self, object_name: str, parent_id: str, relationship_name: str) -> Any:
        _require_str(object_name, "view_related", "objectName")
        _require_str(parent_id, "view_related", "parentId")
        _require_str(relationship_name, "view_related", "relationshipName")
        return await self._send(
            RequestKind.VIEW_RELATED,
            object=object_name,
            data={"parentId": parent_id, "relationshipName": relationship_name},
        )

    async def show_create(self, object_name: str, fields: Mapping[str, Any] | None = None) -> Any:
        return await self._send(RequestKind.SHOW_CREATE, object=object_name, data=dict(fields or {}))

    async def lookup_object(self, object_name: str, data: Mapping[str, Any] | None = None) -> Any:
        return await self._send(RequestKind.LOOKUP_OBJECT, object=object_name, data=dict(data or {}))

    async def scan_barcode(self) -> Any:
        """Scan a barcode with the device camera and return its value."""
        response = await self._send(RequestKind.SCAN_BARCODE, data={})
        if not isinstance(response, dict):
            raise ResponseShapeError(
                "Unexpected response.",
                expected="object",
                received=describe_kind(response),
                operation="scan_barcode",
            )
        return response.get("barcode")

    async def execute_quick_action(
        self,
        action_name: str,
        context_id: str | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self._send(
            RequestKind.EXECUTE_QUICK_ACTION,
            data={"ActionName": action_name, **_compact(ContextId=context_id), **dict(fields or {})},
        )

    async def camera_photo(self, quality: str = "medium") -> Any:
        return await self._send(RequestKind.CAMERA_PHOTO, data={"quality": quality})

    async def camera_photo_picker(self) -> Any:
        return await self._send(RequestKind.CAMERA_PHOTO_PICKER, data={})

    async def file_picker(self) -> Any:
        return await self._send(RequestKind.FILE_PICKER, data={})

    async def display_url(
        self,
        *,
        full_url: str | None = None,
        external_browser: bool | None = None,
        scheme: str | None = None,
        path: str | None = None,
        query_params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Open a URL in the app or the external browser."""
        data = _compact(fullUrl=full_url, scheme=scheme, path=path, queryParams=query_params)
        if external_browser is not None:
            data["externalBrowser"] = external_browser
        return await self._send(RequestKind.DISPLAY_URL, data=data)

    async def set_leave_page_message(self, message: str | None = None) -> Any:
        """Confirmation shown when the user navigates away; empty clears it."""
        return await self._send(RequestKind.SET_LEAVE_PAGE_MESSAGE, object="", data=message or "")

    async def exit(self) -> Any:
        """Close the current document."""
        return await self._send(RequestKind.EXIT, data={})


__all__ = ["PulsarClient", "SYNC_OPTION_KEYS"]
