"""Error taxonomy for folder content listing.

    FolderContentsError
    ├── InvalidRequestError        400, caller supplied bad input
    │   ├── InvalidPath
    │   ├── MissingFolderId
    │   └── InvalidQueryParameter
    │       ├── MissingResourceTypes
    │       ├── UnknownResourceType
    │       ├── UnknownSortKey
    │       ├── LimitOutOfRange
    │       ├── OffsetOutOfRange
    │       ├── UnknownVersionFilter
    │       └── UnknownPublicationStatus
    ├── AuthenticationRequired     401
    ├── AccessDenied               403
    ├── FolderNotFound             404
    └── StoreFailure               500, body never carries details
"""

from typing import Any, Dict, List, Optional, Sequence


class FolderContentsError(Exception):
    """Base error for everything this service reports to a caller."""

    status_code: int = 500
    error_key: str = "SERVER_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Error body sent to the client."""
        body: Dict[str, Any] = {"errorKey": self.error_key, "errorMessage": self.message}
        if self.field:
            body["field"] = self.field
        return body


class InvalidRequestError(FolderContentsError):
    status_code = 400
    error_key = "INVALID_REQUEST"


class InvalidPath(InvalidRequestError):
    error_key = "INVALID_PATH"

    def __init__(self, message: str):
        super().__init__(message, field="path")


class MissingFolderId(InvalidRequestError):
    error_key = "MISSING_FOLDER_ID"

    def __init__(self, message: str = "You need to specify id as a request parameter!"):
        super().__init__(message, field="id")


class InvalidQueryParameter(InvalidRequestError):
    """A single query parameter failed validation.

    When several parameters fail at once, the first failure is raised and
    ``errors`` holds all of them, in field order.
    """

    error_key = "INVALID_QUERY_PARAMETER"
    query_field: str = ""

    def __init__(self, message: str):
        super().__init__(message, field=self.query_field)
        self.errors: List["InvalidQueryParameter"] = [self]

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if len(self.errors) > 1:
            body["errors"] = [
                {"errorKey": e.error_key, "errorMessage": e.message, "field": e.field}
                for e in self.errors
            ]
        return body


class MissingResourceTypes(InvalidQueryParameter):
    error_key = "MISSING_RESOURCE_TYPES"
    query_field = "resource_types"

    def __init__(self):
        super().__init__("You must pass in resource_types as a comma separated list!")


class UnknownResourceType(InvalidQueryParameter):
    error_key = "UNKNOWN_RESOURCE_TYPE"
    query_field = "resource_types"

    def __init__(self, token: str, valid: Sequence[str]):
        self.token = token
        super().__init__(
            f"You passed an illegal resource type:'{token}'. The allowed values are:{list(valid)}"
        )


class UnknownSortKey(InvalidQueryParameter):
    error_key = "UNKNOWN_SORT_KEY"
    query_field = "sort"

    def __init__(self, token: str, valid: Sequence[str]):
        self.token = token
        super().__init__(
            f"You passed an illegal sort type:'{token}'. The allowed values are:{list(valid)}"
        )


class LimitOutOfRange(InvalidQueryParameter):
    error_key = "LIMIT_OUT_OF_RANGE"
    query_field = "limit"


class OffsetOutOfRange(InvalidQueryParameter):
    error_key = "OFFSET_OUT_OF_RANGE"
    query_field = "offset"


class UnknownVersionFilter(InvalidQueryParameter):
    error_key = "UNKNOWN_VERSION_FILTER"
    query_field = "version"

    def __init__(self, token: str, valid: Sequence[str]):
        self.token = token
        super().__init__(
            f"You passed an illegal version filter:'{token}'. The allowed values are:{list(valid)}"
        )


class UnknownPublicationStatus(InvalidQueryParameter):
    error_key = "UNKNOWN_PUBLICATION_STATUS"
    query_field = "publication_status"

    def __init__(self, token: str, valid: Sequence[str]):
        self.token = token
        super().__init__(
            f"You passed an illegal publication status:'{token}'. "
            f"The allowed values are:{list(valid)}"
        )


class AuthenticationRequired(FolderContentsError):
    status_code = 401
    error_key = "AUTHENTICATION_REQUIRED"


class AccessDenied(FolderContentsError):
    status_code = 403
    error_key = "NO_READ_ACCESS_TO_FOLDER"

    def __init__(self, folder_id: str):
        self.folder_id = folder_id
        super().__init__("You do not have read access to the folder")

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["id"] = self.folder_id
        return body


class FolderNotFound(FolderContentsError):
    status_code = 404
    error_key = "FOLDER_NOT_FOUND"

    def __init__(self, address: str, by: str = "id"):
        self.address = address
        self.by = by
        super().__init__(f"The folder can not be found by {by}")

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body[self.by] = self.address
        return body


class StoreFailure(FolderContentsError):
    status_code = 500
    error_key = "STORE_FAILURE"

    def to_dict(self) -> Dict[str, Any]:
        return {"errorKey": self.error_key, "errorMessage": "Internal server error"}
