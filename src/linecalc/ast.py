"""
Abstract Syntax Tree (AST) node definitions for linecalc.

A line parses to exactly one top-level node. Nodes form a strict tree:
every child is owned by exactly one parent.

    NumberLiteral   42
    VariableRef     x
    LineRef         #3
    BinaryOp        a + b
    Assignment      x = expression
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass
class NumberLiteral:
    """A number literal, already converted by the numeric model."""
    value: Any
    column: int = 1


@dataclass
class VariableRef:
    """A reference to a variable assigned on an earlier line."""
    name: str
    column: int = 1


@dataclass
class LineRef:
    """A reference to the result of an earlier line (1-based)."""
    line: int
    column: int = 1


@dataclass
class BinaryOp:
    """A binary arithmetic operation (+ - * /)."""
    operator: str
    left: "Expression"
    right: "Expression"
    column: int = 1


@dataclass
class Assignment:
    """An assignment of an expression's value to a variable."""
    name: str
    expression: "Expression"
    column: int = 1


Expression = Union[NumberLiteral, VariableRef, LineRef, BinaryOp]
AstNode = Union[NumberLiteral, VariableRef, LineRef, BinaryOp, Assignment]


def format_ast(node: AstNode) -> str:
    """Render a node fully parenthesised, e.g. ``(x = (1 + (2 * 3)))``."""
    if isinstance(node, NumberLiteral):
        return str(node.value)
    if isinstance(node, VariableRef):
        return node.name
    if isinstance(node, LineRef):
        return f"#{node.line}"
    if isinstance(node, BinaryOp):
        return f"({format_ast(node.left)} {node.operator} {format_ast(node.right)})"
    if isinstance(node, Assignment):
        return f"({node.name} = {format_ast(node.expression)})"
    raise TypeError(f"not an AST node: {type(node).__name__}")
