GRAMMAR = """
S -> A b
A -> eps | a
"""

# Balanced parentheses, including the empty string.
PARENS = """
P -> ( P ) P
P -> eps
"""
