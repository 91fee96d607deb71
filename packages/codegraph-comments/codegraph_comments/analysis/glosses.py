"""
Gloss generation: canonical "obvious" phrasings of a construct.

A comment that matches one of these phrasings says nothing the code
does not already say. One branch per construct kind; the order of the
returned list is stable for a given construct.
"""

from codegraph_comments.models import ConstructKind, SyntaxConstruct

_CONDITIONAL = [
    "if",
    "check if",
    "conditional",
    "check condition",
    "if statement",
    "condition check",
    "checking if",
    "checks if",
]

_FOR_LOOP = [
    "loop",
    "for loop",
    "iterate",
    "iteration",
    "loop through",
    "iterate through",
    "iterate over",
    "looping",
    "loops",
]

_WHILE_LOOP = ["while loop", "loop while", "loop", "while", "looping"]

_SWITCH = ["switch", "switch statement", "switch case", "check cases"]

_TRY = ["try", "try catch", "error handling", "handle errors"]

_THROW = ["throw", "throw error", "throw exception", "throws"]

_BREAK = ["break", "break loop", "exit loop"]

_CONTINUE = ["continue", "continue loop", "skip iteration"]


def _update_glosses(construct: SyntaxConstruct) -> list[str]:
    name = construct.name or "value"
    if construct.operator == "--":
        op = "decrement"
        return [
            f"{op} {name}",
            op,
            f"{name}--",
            f"subtract 1 from {name}",
            f"subtract one from {name}",
            f"{op}ing {name}",
            f"{op}s {name}",
        ]

    op = "increment"
    return [
        f"{op} {name}",
        op,
        f"{name}++",
        f"add 1 to {name}",
        f"add one to {name}",
        f"{op}ing {name}",
        f"{op}s {name}",
    ]


def _return_glosses(construct: SyntaxConstruct) -> list[str]:
    glosses = ["return", "return value", "return result", "returns"]
    if construct.name:
        glosses += [
            f"return {construct.name}",
            f"return the {construct.name}",
            f"returns {construct.name}",
        ]
    elif construct.literal is not None:
        glosses.append(f"return {construct.literal}")
    return glosses


def _call_glosses(construct: SyntaxConstruct) -> list[str]:
    name = construct.name or "function"
    return [
        f"call {name}",
        name,
        f"invoke {name}",
        f"run {name}",
        f"execute {name}",
        f"calling {name}",
        f"calls {name}",
    ]


def _declaration_glosses(construct: SyntaxConstruct) -> list[str]:
    glosses: list[str] = []
    name = construct.name
    if name:
        keyword = construct.operator or "var"
        glosses += [
            f"declare {name}",
            f"{keyword} {name}",
            f"create {name}",
            f"define {name}",
            f"set {name}",
            f"initialize {name}",
            f"declaring {name}",
            f"creates {name}",
            f"variable {name}",
        ]
        if construct.literal is not None:
            literal = construct.literal
            glosses += [
                f"set {name} to {literal}",
                f"{name} equals {literal}",
                f"{name} is {literal}",
            ]
    glosses += ["declare variable", "create variable", "define variable"]
    return glosses


def _assignment_glosses(construct: SyntaxConstruct) -> list[str]:
    name = construct.name or "variable"
    glosses = [
        f"set {name}",
        f"assign {name}",
        f"{name} =",
        f"update {name}",
        f"assign to {name}",
        f"setting {name}",
        f"assigns {name}",
    ]
    if construct.literal is not None:
        glosses += [f"set {name} to {construct.literal}", f"{name} = {construct.literal}"]
    return glosses


def _definition_glosses(construct: SyntaxConstruct, noun: str) -> list[str]:
    name = construct.name or noun
    return [
        f"{noun} {name}",
        f"define {name}",
        f"create {noun}",
        f"declare {noun}",
        f"{name} {noun}",
    ]


def generate_glosses(construct: SyntaxConstruct | None) -> list[str]:
    """
    Obvious phrasings for a construct; [] for kinds without any.

    Missing names fall back to placeholders ("value", "function",
    "variable") instead of failing.
    """
    if construct is None:
        return []

    kind = construct.kind
    if kind is ConstructKind.UPDATE:
        return _update_glosses(construct)
    if kind is ConstructKind.RETURN:
        return _return_glosses(construct)
    if kind is ConstructKind.CALL:
        return _call_glosses(construct)
    if kind is ConstructKind.DECLARATION:
        return _declaration_glosses(construct)
    if kind is ConstructKind.ASSIGNMENT:
        return _assignment_glosses(construct)
    if kind is ConstructKind.CONDITIONAL:
        return list(_CONDITIONAL)
    if kind is ConstructKind.LOOP:
        return list(_WHILE_LOOP if construct.operator == "while" else _FOR_LOOP)
    if kind is ConstructKind.SWITCH:
        return list(_SWITCH)
    if kind is ConstructKind.TRY:
        return list(_TRY)
    if kind is ConstructKind.THROW:
        return list(_THROW)
    if kind is ConstructKind.BREAK:
        return list(_BREAK)
    if kind is ConstructKind.CONTINUE:
        return list(_CONTINUE)
    if kind is ConstructKind.FUNCTION_DEF:
        return _definition_glosses(construct, "function")
    if kind is ConstructKind.CLASS_DEF:
        return _definition_glosses(construct, "class")

    # EMPTY, UNKNOWN
    return []
