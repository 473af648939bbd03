# The classic expression grammar.  Not LR(0): the reduce items for E -> T
# and E -> E + T share states with T -> T * F, and shift wins on "*".
GRAMMAR = """
# Expressions with precedence encoded in the grammar.
E -> E + T | T
T -> T * F | F      # products
F -> ( E ) | id
"""
