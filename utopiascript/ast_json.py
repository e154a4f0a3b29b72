"""JSON serialization/deserialization for UtopiaScript ASTs.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Tokens are serialized with their
position so that a program loaded back from JSON reports runtime errors
on the same lines as the original source.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Assign,
    BinaryOp,
    Block,
    Call,
    ExprStmt,
    FuncDecl,
    Grouping,
    IfStmt,
    Literal,
    Logical,
    PrintStmt,
    Program,
    ReturnStmt,
    UnaryOp,
    Variable,
    VarDecl,
    WhileStmt,
)
from .tokens import Token, TokenType


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {
        "__type__": "Token",
        "type": t.type.name,
        "lexeme": t.lexeme,
        "literal": t.literal,
        "line": t.line,
        "column": t.column,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["type"]], o["lexeme"], o.get("literal"), o.get("line", 1), o.get("column", 0))


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (int, float, str, bool)):
        return node

    if isinstance(node, Token):
        return token_to_obj(node)

    # Node types
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, PrintStmt):
        return {"type": "PrintStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, VarDecl):
        return {
            "type": "VarDecl",
            "name": ast_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, IfStmt):
        return {
            "type": "IfStmt",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, WhileStmt):
        return {"type": "WhileStmt", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": ast_to_obj(node.name),
            "params": [ast_to_obj(p) for p in node.params],
            "body": [ast_to_obj(s) for s in node.body],
        }
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "keyword": ast_to_obj(node.keyword), "value": ast_to_obj(node.value)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value)}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, UnaryOp):
        return {"type": "UnaryOp", "operator": ast_to_obj(node.operator), "operand": ast_to_obj(node.operand)}
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "left": ast_to_obj(node.left),
            "operator": ast_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Logical):
        return {
            "type": "Logical",
            "left": ast_to_obj(node.left),
            "operator": ast_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": ast_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": ast_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "paren": ast_to_obj(node.paren),
            "args": [ast_to_obj(a) for a in node.args],
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (int, float, str, bool)):
        return obj
    if isinstance(obj, dict) and obj.get("__type__") == "Token":
        return token_from_obj(obj)
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=tuple(ast_from_obj(n) for n in obj["body"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "PrintStmt":
        return PrintStmt(expr=ast_from_obj(obj["expr"]))
    if t == "VarDecl":
        return VarDecl(name=ast_from_obj(obj["name"]), initializer=ast_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block(statements=tuple(ast_from_obj(s) for s in obj["statements"]))
    if t == "IfStmt":
        return IfStmt(
            condition=ast_from_obj(obj["condition"]),
            then_branch=ast_from_obj(obj["then_branch"]),
            else_branch=ast_from_obj(obj.get("else_branch")),
        )
    if t == "WhileStmt":
        return WhileStmt(condition=ast_from_obj(obj["condition"]), body=ast_from_obj(obj["body"]))
    if t == "FuncDecl":
        return FuncDecl(
            name=ast_from_obj(obj["name"]),
            params=tuple(ast_from_obj(p) for p in obj["params"]),
            body=tuple(ast_from_obj(s) for s in obj["body"]),
        )
    if t == "ReturnStmt":
        return ReturnStmt(keyword=ast_from_obj(obj["keyword"]), value=ast_from_obj(obj.get("value")))
    if t == "Literal":
        return Literal(value=ast_from_obj(obj["value"]))
    if t == "Grouping":
        return Grouping(expression=ast_from_obj(obj["expression"]))
    if t == "UnaryOp":
        return UnaryOp(operator=ast_from_obj(obj["operator"]), operand=ast_from_obj(obj["operand"]))
    if t == "BinaryOp":
        return BinaryOp(
            left=ast_from_obj(obj["left"]),
            operator=ast_from_obj(obj["operator"]),
            right=ast_from_obj(obj["right"]),
        )
    if t == "Logical":
        return Logical(
            left=ast_from_obj(obj["left"]),
            operator=ast_from_obj(obj["operator"]),
            right=ast_from_obj(obj["right"]),
        )
    if t == "Variable":
        return Variable(name=ast_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(name=ast_from_obj(obj["name"]), value=ast_from_obj(obj["value"]))
    if t == "Call":
        return Call(
            callee=ast_from_obj(obj["callee"]),
            paren=ast_from_obj(obj["paren"]),
            args=tuple(ast_from_obj(a) for a in obj["args"]),
        )

    raise ValueError(f"Unknown AST node type: {t}")
