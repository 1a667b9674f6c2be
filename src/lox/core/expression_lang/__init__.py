"""
Lox expression language.

Tokenizer, parser, evaluator, and diagnoses for single Lox expressions.

Usage:
    from lox.core.expression_lang import parse_expr, evaluate

    expr = parse_expr("1 + 2 * 3")
    result = evaluate(expr)
    # str(result) == "7"
"""

from lox.core.expression_lang.diagnosis import Diagnosis, DiagnosisKind, diagnose
from lox.core.expression_lang.evaluator import evaluate, is_truthy
from lox.core.expression_lang.parser import parse, parse_expr
from lox.core.expression_lang.tokenizer import lex_errors, scan, tokenize

__all__ = [
    "Diagnosis",
    "DiagnosisKind",
    "diagnose",
    "evaluate",
    "is_truthy",
    "lex_errors",
    "parse",
    "parse_expr",
    "scan",
    "tokenize",
]
