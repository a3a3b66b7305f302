"""JSON serialization/deserialization for the Lox AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Tokens are stored with their type
name, lexeme, line and literal payload so that a round trip reproduces
an equal tree.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call,
    Expression, Print, Var, Block, If, While, Function,
)
from .scanner import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {"type": t.type.name, "lexeme": t.lexeme, "line": t.line, "literal": t.literal}


def token_from_obj(o: Dict[str, Any]) -> Token:
    token_type = TokenType[o["type"]]
    literal = o.get("literal")
    if token_type == TokenType.NUMBER and literal is not None:
        literal = float(literal)
    return Token(token_type, o["lexeme"], o["line"], literal)


def ast_to_obj(node: Any) -> Any:
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]
    if isinstance(node, Token):
        return token_to_obj(node)

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": token_to_obj(node.value)}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, (Binary, Logical)):
        return {
            "type": type(node).__name__,
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "paren": token_to_obj(node.paren),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }

    # Statements
    if isinstance(node, (Expression, Print)):
        return {"type": type(node).__name__, "expression": ast_to_obj(node.expression)}
    if isinstance(node, Var):
        return {"type": "Var", "name": token_to_obj(node.name), "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Function):
        return {
            "type": "Function",
            "name": token_to_obj(node.name),
            "params": [token_to_obj(p) for p in node.params],
            "body": [ast_to_obj(s) for s in node.body],
        }
    raise TypeError(f"Unsupported AST node for serialization: {type(node)!r}")


def ast_from_obj(o: Any) -> Any:
    if isinstance(o, list):
        return [ast_from_obj(x) for x in o]
    if not isinstance(o, dict) or "type" not in o:
        raise ValueError(f"Invalid AST object: {o!r}")

    t = o["type"]
    if t == "Literal":
        return Literal(token_from_obj(o["value"]))
    if t == "Grouping":
        return Grouping(ast_from_obj(o["expression"]))
    if t == "Unary":
        return Unary(token_from_obj(o["operator"]), ast_from_obj(o["right"]))
    if t == "Binary":
        return Binary(ast_from_obj(o["left"]), token_from_obj(o["operator"]), ast_from_obj(o["right"]))
    if t == "Logical":
        return Logical(ast_from_obj(o["left"]), token_from_obj(o["operator"]), ast_from_obj(o["right"]))
    if t == "Variable":
        return Variable(token_from_obj(o["name"]))
    if t == "Assign":
        return Assign(token_from_obj(o["name"]), ast_from_obj(o["value"]))
    if t == "Call":
        arguments: List[Any] = [ast_from_obj(a) for a in o.get("arguments", [])]
        return Call(ast_from_obj(o["callee"]), token_from_obj(o["paren"]), arguments)
    if t == "Expression":
        return Expression(ast_from_obj(o["expression"]))
    if t == "Print":
        return Print(ast_from_obj(o["expression"]))
    if t == "Var":
        return Var(token_from_obj(o["name"]), ast_from_obj(o["initializer"]))
    if t == "Block":
        return Block([ast_from_obj(s) for s in o.get("statements", [])])
    if t == "If":
        return If(ast_from_obj(o["condition"]), ast_from_obj(o["then_branch"]), ast_from_obj(o["else_branch"]))
    if t == "While":
        return While(ast_from_obj(o["condition"]), ast_from_obj(o["body"]))
    if t == "Function":
        params = [token_from_obj(p) for p in o.get("params", [])]
        return Function(token_from_obj(o["name"]), params, [ast_from_obj(s) for s in o.get("body", [])])
    raise ValueError(f"Unknown AST node type: {t}")
