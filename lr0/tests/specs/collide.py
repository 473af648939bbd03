# After "x", both A -> x and B -> x are complete: reduce/reduce.
REDUCE_REDUCE = """
S -> A | B
A -> x
B -> x
"""

# After "a", S -> a is complete while S -> a b can still shift "b".
SHIFT_FIRST = """
S -> a b | a
"""

REDUCE_FIRST = """
S -> a | a b
"""
