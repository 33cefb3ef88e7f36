"""
Diff result schemas.

Every model is frozen and serialises with camelCase aliases, matching the
shape the DiffVault viewer consumes. Line classification is a
discriminated union on ``type``: the position shape of each variant is
fixed, so an added line can never carry a left number and a removed line
can never carry a right one.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    StrictBool,
    StrictStr,
    computed_field,
    model_serializer,
)
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ── Line numbers ───────────────────────────────────────────────────────── #


class AddedLineNumber(_WireModel):
    left: None = None
    right: int = Field(..., ge=1)


class RemovedLineNumber(_WireModel):
    left: int = Field(..., ge=1)
    right: None = None


class UnchangedLineNumber(_WireModel):
    left: int = Field(..., ge=1)
    right: int = Field(..., ge=1)


# ── Lines ──────────────────────────────────────────────────────────────── #


class AddedLine(_WireModel):
    type: Literal["added"] = "added"
    content: str
    line_number: AddedLineNumber


class RemovedLine(_WireModel):
    type: Literal["removed"] = "removed"
    content: str
    line_number: RemovedLineNumber


class UnchangedLine(_WireModel):
    """
    A line present on both sides.

    ``content`` is the modified-side text. ``original_content`` is only set
    when the original-side text differs, which happens when whitespace is
    ignored during comparison, and is left out of serialised output
    otherwise.
    """

    type: Literal["unchanged"] = "unchanged"
    content: str
    line_number: UnchangedLineNumber
    original_content: str | None = None

    @model_serializer(mode="wrap")
    def omit_matching_original(self, handler: SerializerFunctionWrapHandler):
        data = handler(self)
        if self.original_content is None:
            data.pop("originalContent", None)
            data.pop("original_content", None)
        return data

    @property
    def left_content(self) -> str:
        return self.content if self.original_content is None else self.original_content


DiffLine = Annotated[AddedLine | RemovedLine | UnchangedLine, Field(discriminator="type")]


# ── Result ─────────────────────────────────────────────────────────────── #


class DiffChunk(_WireModel):
    """The addressed expansion of one aligned run."""

    lines: tuple[DiffLine, ...] = Field(..., min_length=1)
    is_unchanged: bool


class DiffStats(_WireModel):
    added: int = Field(default=0, ge=0)
    removed: int = Field(default=0, ge=0)
    unchanged: int = Field(default=0, ge=0)

    @computed_field(alias="total")  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return self.added + self.removed + self.unchanged


class DiffResult(_WireModel):
    """Complete line-level diff of two documents."""

    chunks: tuple[DiffChunk, ...] = ()
    stats: DiffStats = Field(default_factory=DiffStats)

    @computed_field(alias="originalLineCount")  # type: ignore[prop-decorator]
    @property
    def original_line_count(self) -> int:
        return self.stats.removed + self.stats.unchanged

    @computed_field(alias="modifiedLineCount")  # type: ignore[prop-decorator]
    @property
    def modified_line_count(self) -> int:
        return self.stats.added + self.stats.unchanged

    @property
    def has_changes(self) -> bool:
        """Return True if any line was added or removed."""
        return bool(self.stats.added or self.stats.removed)


class CharSegment(_WireModel):
    """A run of characters from an intra-line diff."""

    type: Literal["added", "removed", "equal"]
    value: str


# ── Requests / responses ───────────────────────────────────────────────── #


class DiffRequest(_WireModel):
    original: StrictStr
    modified: StrictStr
    ignore_whitespace: StrictBool = False


class InlineDiffRequest(_WireModel):
    old_line: StrictStr
    new_line: StrictStr


class InlineDiffResponse(_WireModel):
    segments: tuple[CharSegment, ...]


class FileInfo(_WireModel):
    filename: str
    extension: str
    language: str
    size_bytes: int


class FileDiffResponse(_WireModel):
    result: DiffResult
    original_file: FileInfo
    modified_file: FileInfo


class DiffLimits(_WireModel):
    max_file_size_bytes: int
    max_diff_input_bytes: int
    supported_file_extensions: list[str]
