from pydantic import BaseModel

from lintwalk.core.kinds import FileKind


class Position(BaseModel):
    row: int
    column: int


class SyntaxNode(BaseModel):
    file_id: int
    type: str
    start_byte: int
    end_byte: int
    start_point: Position
    end_point: Position
    children: list["SyntaxNode"] | None = None


SyntaxNode.model_rebuild()  # necessary for recursive types


class ParseError(BaseModel):
    file_id: int
    message: str
    start_byte: int
    end_byte: int


class ParsedFile(BaseModel):
    file_id: int
    kind: FileKind
    root: SyntaxNode
    errors: list[ParseError] = []

    @property
    def ok(self) -> bool:
        return not self.errors
