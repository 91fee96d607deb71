"""
Per-language node tables for lowering tree-sitter trees into constructs.

Each grammar node type maps to a ConstructKind. Node types not listed
become UNKNOWN constructs; transparent wrappers are dropped and their
children lowered in their place. Delegating wrappers (decorated Python
definitions) keep their own span but take kind and names from one child.
"""

import re
from dataclasses import dataclass, field

from tree_sitter import Node as TSNode

from codegraph_comments.models import ConstructKind

IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "type_identifier",
    }
)

_STRING_LITERAL = re.compile(r"^[A-Za-z]*(\"\"\"|'''|\"|'|`)(.*)\1$", re.DOTALL)


@dataclass(frozen=True)
class LanguageSpec:
    """Node tables for one grammar."""

    name: str
    kinds: dict[str, ConstructKind]
    transparent: frozenset[str] = frozenset()
    comment_types: frozenset[str] = frozenset({"comment"})
    literal_types: frozenset[str] = frozenset()
    integer_types: frozenset[str] = frozenset()
    loop_keywords: dict[str, str] = field(default_factory=dict)
    delegating: dict[str, str] = field(default_factory=dict)


_JS_KINDS = {
    "for_statement": ConstructKind.LOOP,
    "for_in_statement": ConstructKind.LOOP,
    "while_statement": ConstructKind.LOOP,
    "do_statement": ConstructKind.LOOP,
    "if_statement": ConstructKind.CONDITIONAL,
    "switch_statement": ConstructKind.SWITCH,
    "try_statement": ConstructKind.TRY,
    "throw_statement": ConstructKind.THROW,
    "break_statement": ConstructKind.BREAK,
    "continue_statement": ConstructKind.CONTINUE,
    "return_statement": ConstructKind.RETURN,
    "empty_statement": ConstructKind.EMPTY,
    "call_expression": ConstructKind.CALL,
    "new_expression": ConstructKind.CALL,
    "update_expression": ConstructKind.UPDATE,
    "assignment_expression": ConstructKind.ASSIGNMENT,
    "augmented_assignment_expression": ConstructKind.ASSIGNMENT,
    "lexical_declaration": ConstructKind.DECLARATION,
    "variable_declaration": ConstructKind.DECLARATION,
    "function_declaration": ConstructKind.FUNCTION_DEF,
    "generator_function_declaration": ConstructKind.FUNCTION_DEF,
    "function_expression": ConstructKind.FUNCTION_DEF,
    "function": ConstructKind.FUNCTION_DEF,
    "arrow_function": ConstructKind.FUNCTION_DEF,
    "method_definition": ConstructKind.FUNCTION_DEF,
    "class_declaration": ConstructKind.CLASS_DEF,
    "class": ConstructKind.CLASS_DEF,
}

_JS_LOOPS = {
    "for_statement": "for",
    "for_in_statement": "for",
    "while_statement": "while",
    "do_statement": "while",
}

_JS_LITERALS = frozenset({"number", "string", "true", "false", "null", "undefined"})

JAVASCRIPT = LanguageSpec(
    name="javascript",
    kinds=_JS_KINDS,
    transparent=frozenset({"expression_statement"}),
    literal_types=_JS_LITERALS,
    integer_types=frozenset({"number"}),
    loop_keywords=_JS_LOOPS,
)

_TS_KINDS = {
    **_JS_KINDS,
    "abstract_class_declaration": ConstructKind.CLASS_DEF,
    "function_signature": ConstructKind.FUNCTION_DEF,
}

TYPESCRIPT = LanguageSpec(
    name="typescript",
    kinds=_TS_KINDS,
    transparent=frozenset({"expression_statement"}),
    literal_types=_JS_LITERALS,
    integer_types=frozenset({"number"}),
    loop_keywords=_JS_LOOPS,
)

TSX = LanguageSpec(
    name="tsx",
    kinds=_TS_KINDS,
    transparent=frozenset({"expression_statement"}),
    literal_types=_JS_LITERALS,
    integer_types=frozenset({"number"}),
    loop_keywords=_JS_LOOPS,
)

PYTHON = LanguageSpec(
    name="python",
    kinds={
        "for_statement": ConstructKind.LOOP,
        "while_statement": ConstructKind.LOOP,
        "if_statement": ConstructKind.CONDITIONAL,
        "match_statement": ConstructKind.SWITCH,
        "try_statement": ConstructKind.TRY,
        "raise_statement": ConstructKind.THROW,
        "break_statement": ConstructKind.BREAK,
        "continue_statement": ConstructKind.CONTINUE,
        "return_statement": ConstructKind.RETURN,
        "pass_statement": ConstructKind.EMPTY,
        "call": ConstructKind.CALL,
        "assignment": ConstructKind.ASSIGNMENT,
        "augmented_assignment": ConstructKind.ASSIGNMENT,
        "function_definition": ConstructKind.FUNCTION_DEF,
        "lambda": ConstructKind.FUNCTION_DEF,
        "class_definition": ConstructKind.CLASS_DEF,
    },
    # block starts on its first statement's line and would shadow it
    transparent=frozenset({"expression_statement", "block"}),
    literal_types=frozenset({"integer", "float", "string", "true", "false", "none"}),
    integer_types=frozenset({"integer"}),
    loop_keywords={"for_statement": "for", "while_statement": "while"},
    delegating={"decorated_definition": "definition"},
)

_SPECS = {spec.name: spec for spec in (JAVASCRIPT, TYPESCRIPT, TSX, PYTHON)}


def get_language_spec(language: str) -> LanguageSpec | None:
    return _SPECS.get(language)


@dataclass(frozen=True)
class ConstructFields:
    """Kind and captured operands for one node."""

    kind: ConstructKind
    names: tuple[str, ...] = ()
    literals: tuple[str, ...] = ()
    operator: str | None = None


class NodeDescriber:
    """Extracts construct fields from tree-sitter nodes of one grammar."""

    def __init__(self, spec: LanguageSpec, source: bytes):
        self.spec = spec
        self.source = source

    def text(self, node: TSNode) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def identifier(self, node: TSNode | None) -> str | None:
        if node is not None and node.type in IDENTIFIER_TYPES:
            return self.text(node)
        return None

    def literal(self, node: TSNode | None) -> str | None:
        if node is None or node.type not in self.spec.literal_types:
            return None
        raw = self.text(node)
        match = _STRING_LITERAL.match(raw)
        if match:
            return match.group(2)
        return raw

    def callee(self, node: TSNode | None) -> str | None:
        """Callee identifier, or the property of a member/attribute access."""
        if node is None:
            return None
        name = self.identifier(node)
        if name is not None:
            return name
        if node.type == "member_expression":
            return self.identifier(node.child_by_field_name("property"))
        if node.type == "attribute":
            return self.identifier(node.child_by_field_name("attribute"))
        return None

    def describe(self, node: TSNode) -> ConstructFields:
        wrapped = self.spec.delegating.get(node.type)
        if wrapped is not None:
            inner = node.child_by_field_name(wrapped)
            if inner is not None:
                return self.describe(inner)

        kind = self.spec.kinds.get(node.type, ConstructKind.UNKNOWN)

        if kind is ConstructKind.UNKNOWN:
            name = self.identifier(node)
            return ConstructFields(kind=kind, names=(name,) if name else ())

        if kind is ConstructKind.CALL:
            target = node.child_by_field_name("function") or node.child_by_field_name("constructor")
            return self._fields(kind, name=self.callee(target))

        if kind is ConstructKind.UPDATE:
            operator = "--" if any(child.type == "--" for child in node.children) else "++"
            argument = node.child_by_field_name("argument")
            return self._fields(kind, name=self.identifier(argument), operator=operator)

        if kind is ConstructKind.ASSIGNMENT:
            return self._describe_assignment(node)

        if kind is ConstructKind.DECLARATION:
            return self._describe_declaration(node)

        if kind is ConstructKind.RETURN:
            operand = next((child for child in node.named_children if child.type not in self.spec.comment_types), None)
            return self._fields(kind, name=self.identifier(operand), literal=self.literal(operand))

        if kind is ConstructKind.LOOP:
            return ConstructFields(kind=kind, operator=self.spec.loop_keywords.get(node.type))

        if kind in (ConstructKind.FUNCTION_DEF, ConstructKind.CLASS_DEF):
            return self._fields(kind, name=self.identifier(node.child_by_field_name("name")))

        return ConstructFields(kind=kind)

    def _describe_assignment(self, node: TSNode) -> ConstructFields:
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        name = self.identifier(left)
        operator_node = node.child_by_field_name("operator")
        operator = self.text(operator_node) if operator_node is not None else None

        # x += 1 / x -= 1 read as increment / decrement
        if operator in ("+=", "-=") and right is not None and right.type in self.spec.integer_types:
            if self.text(right) == "1":
                return self._fields(ConstructKind.UPDATE, name=name, operator="++" if operator == "+=" else "--")

        return self._fields(ConstructKind.ASSIGNMENT, name=name, literal=self.literal(right), operator=operator)

    def _describe_declaration(self, node: TSNode) -> ConstructFields:
        keyword_node = node.child_by_field_name("kind")
        keyword = self.text(keyword_node) if keyword_node is not None else "var"

        declarator = next((child for child in node.named_children if child.type == "variable_declarator"), None)
        if declarator is None:
            return ConstructFields(kind=ConstructKind.DECLARATION, operator=keyword)

        return self._fields(
            ConstructKind.DECLARATION,
            name=self.identifier(declarator.child_by_field_name("name")),
            literal=self.literal(declarator.child_by_field_name("value")),
            operator=keyword,
        )

    @staticmethod
    def _fields(
        kind: ConstructKind,
        name: str | None = None,
        literal: str | None = None,
        operator: str | None = None,
    ) -> ConstructFields:
        return ConstructFields(
            kind=kind,
            names=(name,) if name else (),
            literals=(literal,) if literal is not None else (),
            operator=operator,
        )
