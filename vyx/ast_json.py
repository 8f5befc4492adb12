"""JSON serialization/deserialization for the Vyx AST.

This module converts between Vyx AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node becomes a dict
with a ``"type"`` key naming its class; tokens keep their kind, literal
and position so runtime errors raised while executing a loaded AST still
point at the right line.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict, List

from . import ast as nodes
from .tokens import Position, Token, TokenKind

NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls
    for cls in (
        nodes.Literal, nodes.Grouping, nodes.Unary, nodes.Binary,
        nodes.Logical, nodes.Ternary, nodes.Assign, nodes.Variable,
        nodes.Call, nodes.Expression, nodes.Print, nodes.Let, nodes.Block,
        nodes.If, nodes.While, nodes.Function,
    )
}


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "__type__": "Token",
        "kind": token.kind.name,
        "literal": token.literal,
        "line": token.position.line,
        "column": token.position.column,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenKind[o["kind"]], o.get("literal"), Position(o["line"], o["column"]))


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None or isinstance(node, (bool, float, int, str)):
        return node
    if isinstance(node, Token):
        return token_to_obj(node)
    if isinstance(node, (list, tuple)):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, nodes.Node):
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj
    raise TypeError(f"cannot serialize {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (bool, float, str)):
        return obj
    if isinstance(obj, int):
        # JSON has no float/int distinction; Vyx numbers are always floats
        return float(obj)
    if isinstance(obj, list):
        return tuple(ast_from_obj(o) for o in obj)
    if isinstance(obj, dict):
        if obj.get("__type__") == "Token":
            return token_from_obj(obj)
        type_name = obj.get("type")
        if type_name not in NODE_TYPES:
            raise ValueError(f"unknown AST node type {type_name!r}")
        cls = NODE_TYPES[type_name]
        kwargs = {f.name: ast_from_obj(obj.get(f.name)) for f in fields(cls)}
        return cls(**kwargs)
    raise ValueError(f"cannot deserialize {obj!r}")


def program_to_obj(statements: List[nodes.Stmt]) -> Dict[str, Any]:
    return {"type": "Program", "body": [ast_to_obj(s) for s in statements]}


def program_from_obj(obj: Dict[str, Any]) -> List[nodes.Stmt]:
    if obj.get("type") != "Program":
        raise ValueError("expected a Program object")
    return [ast_from_obj(s) for s in obj.get("body", [])]
