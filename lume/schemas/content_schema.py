import typing

from pydantic import BaseModel, Field

__all__ = [
    'Chapter',
    'DocumentArtifact',
    'MarkdownArtifact',
    'PresentationOutline',
    'Slide',
    'SlideType',
    'SlidesOutlineArtifact',
]


SlideType = typing.Literal['text', 'title', 'bullets', 'image', 'chart']

NonEmptyStr = typing.Annotated[str, Field(min_length=1)]


class Slide(BaseModel):
    slideNumber: int = Field(gt=0, strict=True)
    slideTitle: NonEmptyStr
    slideContent: NonEmptyStr
    slideType: SlideType


class Chapter(BaseModel):
    chapterTitle: NonEmptyStr
    slides: typing.List[Slide] = Field(min_length=1)


class PresentationOutline(BaseModel):
    pptTitle: NonEmptyStr
    slidesCount: int = Field(gt=0, le=10, strict=True)
    # Required key, but the value may be null
    overallRequirements: typing.Optional[str]


class SlidesOutlineArtifact(BaseModel):
    outline: PresentationOutline
    chapters: typing.List[Chapter] = Field(min_length=1, max_length=10)


class MarkdownArtifact(BaseModel):
    title: NonEmptyStr
    content: NonEmptyStr
    description: typing.Optional[str] = None


class DocumentArtifact(BaseModel):
    title: NonEmptyStr
    content: typing.Optional[str] = None
    description: typing.Optional[str] = None
