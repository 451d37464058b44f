"""Default expression grammar: lexer, expression parser, select/expand parser."""

from .expression import ExpressionParser
from .lexer import Lexer, Token, TokenKind
from .odata import ODataExpressionGrammar
from .select_expand import SelectExpandParser

__all__ = [
    "ExpressionParser",
    "Lexer",
    "ODataExpressionGrammar",
    "SelectExpandParser",
    "Token",
    "TokenKind",
]
