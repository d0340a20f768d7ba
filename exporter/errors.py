"""
Error taxonomy for the export and publish pipeline.
"""

from typing import List, Optional, Sequence

from config.constants import ARTICLE_ID_KEY_PATH, COMPONENT_ERRORS


class ExportError(Exception):
    """Base error for export and publish failures"""
    pass


class ConfigurationError(ExportError):
    """Required export configuration is missing"""
    pass


class ValidationError(ExportError):
    """The assembled document is not well-formed"""
    pass


class ContentNotFoundError(ExportError):
    """The content item no longer exists in the content store"""

    def __init__(self, content_id: str):
        self.content_id = content_id
        super().__init__(f"Could not find content with id {content_id}")


class SchedulingError(ExportError):
    """The scheduler refused an asynchronous push"""

    def __init__(self, content_id: str, cause: Exception):
        self.content_id = content_id
        self.cause = cause
        super().__init__(f"Could not schedule push of content {content_id}: {cause}")


class ComponentStateError(ExportError):
    """A component was built twice or serialized before being built"""
    pass


class ComponentError(ExportError):
    """A node matched no known component or was rejected by one"""

    phase = COMPONENT_ERRORS

    def __init__(self, component: str, message: Optional[str] = None):
        self.component = component
        super().__init__(message or f"Unsupported component: {component}")


class UnsupportedComponentsError(ExportError):
    """Component errors aborted the publish under the 'fail' alert policy"""

    def __init__(self, components: Sequence[str]):
        self.components: List[str] = list(components)
        super().__init__(
            "The following components are unsupported and prevented publishing: "
            + ", ".join(self.components)
        )


class RemoteRequestError(ExportError):
    """
    Error reported by the publishing API.

    Attributes:
        code: Machine-readable error code (e.g. WRONG_REVISION)
        key_path: Path of the offending field, if reported
        status_code: HTTP status, if the error came over HTTP
    """

    def __init__(
        self,
        code: str,
        key_path: Optional[Sequence[str]] = None,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.code = code
        self.key_path: List[str] = list(key_path or [])
        self.status_code = status_code
        # Set when this error came from a recovery attempt
        self.original_error: Optional["RemoteRequestError"] = None
        if message is None:
            message = code
            if self.key_path:
                message += f" (keyPath {'.'.join(self.key_path)})"
        super().__init__(message)


class RemoteConflictError(RemoteRequestError):
    """WRONG_REVISION: the remote article was modified concurrently"""

    def __init__(self, key_path=None, message=None, status_code=None):
        super().__init__("WRONG_REVISION", key_path, message, status_code)


class RemoteGoneError(RemoteRequestError):
    """NOT_FOUND: the remote article was deleted externally"""

    def __init__(self, key_path=None, message=None, status_code=None):
        super().__init__("NOT_FOUND", key_path, message, status_code)

    @property
    def is_article_missing(self) -> bool:
        """True when the missing resource is the article itself."""
        return ARTICLE_ID_KEY_PATH in self.key_path


def error_for_code(
    code: str,
    key_path: Optional[Sequence[str]] = None,
    message: Optional[str] = None,
    status_code: Optional[int] = None,
) -> RemoteRequestError:
    """Map an API error code to the matching exception type."""
    if code == "WRONG_REVISION":
        return RemoteConflictError(key_path, message, status_code)
    if code == "NOT_FOUND":
        return RemoteGoneError(key_path, message, status_code)
    return RemoteRequestError(code, key_path, message, status_code)
