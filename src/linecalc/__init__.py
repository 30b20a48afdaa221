"""
linecalc - a line-oriented expression interpreter.

Every line of a document is an independent arithmetic statement: a plain
expression or a variable assignment. Lines can use variables assigned
above them and reference earlier results with ``#N``. The whole document
is re-evaluated top to bottom on every change.

This module provides:
- Lexer: Tokenizes one line
- Parser: Builds a single-statement AST from tokens
- Evaluator: Computes a line's value
- LineOrchestrator: Runs a full pass and classifies each line

Usage:
    from linecalc import run

    result = run(["x = 10", "y = x * 2", "#2 - 5"])
    for outcome in result.outcomes:
        print(outcome.line_number, outcome.display)
    print(sorted(result.scope))
"""

__version__ = "1.0.0"

from .tokens import (
    Token,
    TokenType,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse,
)

from .ast import (
    AstNode,
    Expression,
    NumberLiteral,
    VariableRef,
    LineRef,
    BinaryOp,
    Assignment,
    format_ast,
)

from .errors import (
    CalcError,
    LexerError,
    ParserError,
    EvaluationError,
    InternalError,
    Diagnostic,
)

from .numeric import (
    NumericModel,
    FloatModel,
    DecimalModel,
    get_numeric_model,
)

from .config import (
    CalcConfig,
    ConfigError,
    load_config,
    config_from_env,
)

from .runtime import (
    OutcomeKind,
    LineOutcome,
    PassResult,
    PassContext,
    Evaluator,
    evaluate,
    LineOrchestrator,
    run,
    run_text,
)

__all__ = [
    # Tokens and lexer
    'Token',
    'TokenType',
    'Lexer',
    'tokenize',

    # Parser and AST
    'Parser',
    'parse',
    'AstNode',
    'Expression',
    'NumberLiteral',
    'VariableRef',
    'LineRef',
    'BinaryOp',
    'Assignment',
    'format_ast',

    # Errors
    'CalcError',
    'LexerError',
    'ParserError',
    'EvaluationError',
    'InternalError',
    'Diagnostic',

    # Numbers and config
    'NumericModel',
    'FloatModel',
    'DecimalModel',
    'get_numeric_model',
    'CalcConfig',
    'ConfigError',
    'load_config',
    'config_from_env',

    # Runtime
    'OutcomeKind',
    'LineOutcome',
    'PassResult',
    'PassContext',
    'Evaluator',
    'evaluate',
    'LineOrchestrator',
    'run',
    'run_text',
]
