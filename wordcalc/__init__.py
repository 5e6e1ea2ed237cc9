"""Word-operator arithmetic: parse "1 add 2 mul 3" into a tree and evaluate it."""

__version__ = "0.1.0"
