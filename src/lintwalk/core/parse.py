from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from lintwalk.core.kinds import FileKind
from lintwalk.models import ParsedFile, ParseError, Position, SyntaxNode

_LANGUAGE: SupportedLanguage = "javascript"
_MODULE_ONLY_STATEMENTS = frozenset({"import_statement", "export_statement"})


def _make_node(node: Node, file_id: int, children: list[SyntaxNode] | None) -> SyntaxNode:
    return SyntaxNode(
        type=node.type,
        file_id=file_id,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        start_point=Position(row=node.start_point[0], column=node.start_point[1]),
        end_point=Position(row=node.end_point[0], column=node.end_point[1]),
        children=children,
    )


def _to_model(root: Node, file_id: int) -> SyntaxNode:
    # post-order over an explicit stack: tree depth is not bounded by the recursion limit
    built: list[SyntaxNode] = []
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if node.child_count == 0:
            built.append(_make_node(node, file_id, None))
        elif not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
        else:
            children = built[-node.child_count :]
            del built[-node.child_count :]
            built.append(_make_node(node, file_id, children))
    return built[0]


def _syntax_error(node: Node, file_id: int) -> ParseError | None:
    if node.is_missing:
        message = f"expected `{node.type}`"
    elif node.type == "ERROR":
        message = "unexpected token"
    else:
        return None
    return ParseError(file_id=file_id, message=message, start_byte=node.start_byte, end_byte=node.end_byte)


def _collect_syntax_errors(root: Node, file_id: int) -> list[ParseError]:
    errors: list[ParseError] = []
    stack = [root]
    while stack:
        node = stack.pop()
        error = _syntax_error(node, file_id)
        if error is not None:
            errors.append(error)
        elif node.has_error:
            stack.extend(reversed(node.children))
    return errors


def _parse(source: str, file_id: int) -> tuple[Node, list[ParseError]]:
    tree = get_parser(_LANGUAGE).parse(source.encode("utf-8"))
    root = tree.root_node
    errors = _collect_syntax_errors(root, file_id)
    return root, errors


def parse_module(source: str, file_id: int) -> ParsedFile:
    """Parse ``source`` as an ES module; import and export declarations are allowed."""
    root, errors = _parse(source, file_id)
    return ParsedFile(file_id=file_id, kind=FileKind.MODULE, root=_to_model(root, file_id), errors=errors)


def parse_script(source: str, file_id: int) -> ParsedFile:
    """Parse ``source`` as a classic script.

    Top-level import and export declarations parse fine with the JavaScript
    grammar but are only legal in modules, so each one is reported.
    """
    root, errors = _parse(source, file_id)
    for child in root.children:
        if child.type in _MODULE_ONLY_STATEMENTS:
            keyword = "import" if child.type == "import_statement" else "export"
            errors.append(
                ParseError(
                    file_id=file_id,
                    message=f"`{keyword}` declarations are only allowed in modules",
                    start_byte=child.start_byte,
                    end_byte=child.end_byte,
                )
            )
    errors.sort(key=lambda e: (e.start_byte, e.end_byte))
    return ParsedFile(file_id=file_id, kind=FileKind.SCRIPT, root=_to_model(root, file_id), errors=errors)
