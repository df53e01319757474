"""JSON serialization/deserialization for treelox ASTs.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Tokens keep their type, lexeme,
literal and line so a dumped program reports errors on the same lines
when it is loaded and run later. Literal values are tagged because JSON
cannot tell a Lox number from a boolean or nil on its own.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Literal, Grouping, Unary, Binary, Variable, Assign,
    ExprStmt, PrintStmt, VarStmt, Block,
)
from .token import Token, TokenType
from .types import NIL, NilVal, is_number


def value_to_obj(value: Any) -> Dict[str, Any]:
    if isinstance(value, bool):
        return {"kind": "boolean", "value": value}
    if is_number(value):
        return {"kind": "number", "value": value}
    if isinstance(value, str):
        return {"kind": "string", "value": value}
    if isinstance(value, NilVal):
        return {"kind": "nil"}
    raise TypeError(f"Unsupported literal value: {value!r}")


def value_from_obj(o: Dict[str, Any]) -> Any:
    kind = o["kind"]
    if kind == "boolean":
        return bool(o["value"])
    if kind == "number":
        return float(o["value"])
    if kind == "string":
        return str(o["value"])
    if kind == "nil":
        return NIL
    raise ValueError(f"Unknown literal kind: {kind}")


def token_to_obj(t: Token) -> Dict[str, Any]:
    obj: Dict[str, Any] = {"type": t.type.name, "lexeme": t.lexeme, "line": t.line}
    if t.literal is not None:
        obj["literal"] = t.literal
    return obj


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["type"]], o.get("lexeme", ""), o.get("literal"), o.get("line"))


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Expressions
    if isinstance(node, Literal):
        return {"node": "Literal", "value": value_to_obj(node.value)}
    if isinstance(node, Grouping):
        return {"node": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Unary):
        return {"node": "Unary", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, Binary):
        return {
            "node": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"node": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"node": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}

    # Statements
    if isinstance(node, ExprStmt):
        return {"node": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, PrintStmt):
        return {"node": "PrintStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, VarStmt):
        return {
            "node": "VarStmt",
            "name": token_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Block):
        return {"node": "Block", "statements": [ast_to_obj(s) for s in node.statements]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def _node_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [_node_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError(f"expected an AST node, got {type(obj).__name__}")
    t = obj.get("node")
    if t == "Literal":
        return Literal(value_from_obj(obj["value"]))
    if t == "Grouping":
        return Grouping(_node_from_obj(obj["expression"]))
    if t == "Unary":
        return Unary(token_from_obj(obj["operator"]), _node_from_obj(obj["right"]))
    if t == "Binary":
        return Binary(
            _node_from_obj(obj["left"]),
            token_from_obj(obj["operator"]),
            _node_from_obj(obj["right"]),
        )
    if t == "Variable":
        return Variable(token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(token_from_obj(obj["name"]), _node_from_obj(obj["value"]))
    if t == "ExprStmt":
        return ExprStmt(_node_from_obj(obj["expr"]))
    if t == "PrintStmt":
        return PrintStmt(_node_from_obj(obj["expr"]))
    if t == "VarStmt":
        return VarStmt(token_from_obj(obj["name"]), _node_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block([_node_from_obj(s) for s in obj["statements"]])

    raise ValueError(f"Unknown AST node type: {t}")


def ast_from_obj(obj: Any) -> Any:
    """Rebuild AST nodes from `obj`; malformed input raises ValueError."""
    try:
        return _node_from_obj(obj)
    except KeyError as e:
        raise ValueError(f"Invalid AST object: missing field {e}") from None
    except (TypeError, AttributeError) as e:
        raise ValueError(f"Invalid AST object: {e}") from None
