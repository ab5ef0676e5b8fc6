import logging
import typing
from dataclasses import dataclass, field

import pydantic

from lume.config import settings
from lume.constants import ArtifactType
from lume.schemas.content_schema import (
    DocumentArtifact,
    MarkdownArtifact,
    SlidesOutlineArtifact,
)

__all__ = [
    'ArtifactTypeSpec',
    'ValidationResult',
    'get_artifact_type',
    'register_artifact_type',
    'validate_content',
]


@dataclass(frozen=True)
class ArtifactTypeSpec:
    tag: str
    schema: typing.Type[pydantic.BaseModel]
    default_title: str
    title_getter: typing.Callable[[dict], typing.Optional[str]]
    icon: str = 'file'
    aliases: typing.Tuple[str, ...] = ()


@dataclass
class ValidationResult:
    ok: bool
    value: typing.Any = None
    errors: typing.List[dict] = field(default_factory=list)


_REGISTRY: typing.Dict[str, ArtifactTypeSpec] = {}


def register_artifact_type(spec: ArtifactTypeSpec) -> ArtifactTypeSpec:
    for tag in (spec.tag, *spec.aliases):
        if tag in _REGISTRY and _REGISTRY[tag] is not spec:
            logging.warning('Artifact type %s is registered again', tag)
        _REGISTRY[tag] = spec
    return spec


def get_artifact_type(type_: str) -> typing.Optional[ArtifactTypeSpec]:
    return _REGISTRY.get(type_)


def validate_content(type_: str, content: typing.Any) -> ValidationResult:
    spec = get_artifact_type(type_)
    if spec is None:
        if settings.strict_artifact_types:
            return ValidationResult(
                ok=False,
                errors=[{'msg': f'Unknown artifact type: {type_}'}],
            )
        # Unregistered types are stored as opaque payloads
        return ValidationResult(ok=True, value=content)
    try:
        spec.schema.model_validate(content)
    except pydantic.ValidationError as exc:
        return ValidationResult(
            ok=False,
            errors=exc.errors(include_url=False, include_context=False),
        )
    # Schemas only check the payload, it is stored as given
    return ValidationResult(ok=True, value=content)


def _get_slides_title(content: dict) -> typing.Optional[str]:
    outline = content.get('outline')
    if isinstance(outline, dict):
        return outline.get('pptTitle')
    return None


def _get_document_title(content: dict) -> typing.Optional[str]:
    return content.get('title')


register_artifact_type(ArtifactTypeSpec(
    tag=ArtifactType.SLIDES_OUTLINE.value,
    schema=SlidesOutlineArtifact,
    default_title='Untitled Presentation',
    title_getter=_get_slides_title,
    icon='presentation',
    aliases=('slides-outline', 'artifact_type_slides_outline'),
))
register_artifact_type(ArtifactTypeSpec(
    tag=ArtifactType.MARKDOWN.value,
    schema=MarkdownArtifact,
    default_title='Untitled Document',
    title_getter=_get_document_title,
    icon='file-markdown',
    aliases=('artifact_type_document',),
))
register_artifact_type(ArtifactTypeSpec(
    tag=ArtifactType.DOCUMENT.value,
    schema=DocumentArtifact,
    default_title='Untitled Document',
    title_getter=_get_document_title,
    icon='file-text',
))
