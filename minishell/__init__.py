"""Building blocks of a small command shell: lexer, parser, expansion, environment and builtins."""

__version__ = "0.1.0"
__all__ = ["__version__"]