import enum

__all__ = [
    "ARTIFACT_ID_PREFIX",
    "ARTIFACT_ID_SIZE",
    "INITIAL_VERSION",
    "TOOL_PART_PREFIX",
    "ArtifactType",
    "ToolPartState",
]


ARTIFACT_ID_PREFIX = "artifact"
ARTIFACT_ID_SIZE = 16
INITIAL_VERSION = "1"
TOOL_PART_PREFIX = "tool-"


class ArtifactType(str, enum.Enum):
    SLIDES_OUTLINE = "slidesOutline"
    MARKDOWN = "markdown"
    DOCUMENT = "document"


class ToolPartState(str, enum.Enum):
    INPUT_STREAMING = "input-streaming"
    INPUT_AVAILABLE = "input-available"
    OUTPUT_AVAILABLE = "output-available"
    OUTPUT_ERROR = "output-error"
