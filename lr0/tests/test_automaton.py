import unittest

import lr0
from lr0.tests.specs import arith, expr, nullable


EXPR = [
    ("E", ["E", "+", "T"]),
    ("E", ["T"]),
    ("T", ["id"]),
]


class TestGrammar(unittest.TestCase):
    def test_augment(self):
        grammar = lr0.Grammar(EXPR)
        start = grammar.productions[0]
        self.assertEqual(start.index, 0)
        self.assertEqual(start.lhs, "E'")
        self.assertEqual(start.rhs, ("E",))
        self.assertEqual(grammar.userStartSym, "E")
        self.assertEqual(
            [prod.index for prod in grammar.productions], [0, 1, 2, 3]
        )

    def test_symbols(self):
        grammar = lr0.Grammar(EXPR)
        self.assertEqual(grammar.nonterminals, ("E'", "E", "T"))
        self.assertEqual(grammar.terminals, ("+", "id", "$"))
        self.assertTrue(grammar.isTerminal("$"))
        self.assertTrue(grammar.isNonterminal("E'"))
        self.assertFalse(grammar.isTerminal("T"))

    def test_fresh_start_symbol(self):
        grammar = lr0.Grammar([("E", ["E'"]), ("E'", ["x"])])
        self.assertEqual(grammar.startSym, "E''")
        self.assertEqual(grammar.productions[0].rhs, ("E",))

    def test_explicit_start(self):
        grammar = lr0.Grammar(EXPR, start="T")
        self.assertEqual(repr(grammar.productions[0]), "T' -> T")
        self.assertRaises(lr0.SpecError, lr0.Grammar, EXPR, "id")

    def test_empty(self):
        self.assertRaises(lr0.EmptyGrammarError, lr0.Grammar, [])
        self.assertRaises(lr0.EmptyGrammarError, lr0.Spec, "# nothing\n")

    def test_reserved_symbol(self):
        self.assertRaises(lr0.SpecError, lr0.Grammar, [("S", ["a", "$"])])

    def test_items(self):
        grammar = lr0.Grammar(EXPR)
        prod = grammar.productions[1]
        item = prod.item(1)
        self.assertEqual(grammar.symbolAfterDot(item), "+")
        self.assertEqual(item.advance(), prod.item(2))
        self.assertIsNone(grammar.symbolAfterDot(prod.item(3)))
        self.assertTrue(prod.item(3).complete)
        self.assertEqual(repr(item), "[1] E -> E . + T")
        self.assertLess(prod.item(3), grammar.productions[2].item(0))


class TestAutomaton(unittest.TestCase):
    def test_closure_idempotent(self):
        spec = lr0.Spec(arith.GRAMMAR, skinny=False)
        grammar = spec.grammar()
        for itemSet in spec.states:
            self.assertEqual(lr0.ItemSet.closure(grammar, itemSet), itemSet)

        kernel = [grammar.productions[1].item(2)]
        once = lr0.ItemSet.closure(grammar, kernel)
        self.assertEqual(lr0.ItemSet.closure(grammar, once), once)
        self.assertEqual(
            once.key, ((1, 2), (3, 0), (4, 0), (5, 0), (6, 0))
        )

    def test_closure_order(self):
        grammar = lr0.Grammar(EXPR)
        items = [grammar.productions[0].item(0)]
        itemSet = lr0.ItemSet.closure(grammar, items)
        self.assertEqual(itemSet.key, ((0, 0), (1, 0), (2, 0), (3, 0)))

        reordered = lr0.ItemSet(grammar, reversed(list(itemSet)))
        self.assertEqual(reordered, itemSet)
        self.assertEqual(hash(reordered), hash(itemSet))

    def test_goto_deterministic(self):
        spec = lr0.Spec(arith.GRAMMAR, skinny=False)
        grammar = spec.grammar()
        for itemSet in spec.states:
            twin = lr0.ItemSet(grammar, reversed(list(itemSet)))
            for sym in itemSet.symbols():
                target = itemSet.gotoState(sym)
                self.assertEqual(target, itemSet.gotoState(sym))
                self.assertEqual(target, twin.gotoState(sym))
                self.assertGreaterEqual(spec.findStateIndex(target), 0)

    def test_goto_empty(self):
        spec = lr0.Spec(expr.GRAMMAR, skinny=False)
        itemSet = spec.states[0]
        self.assertEqual(len(itemSet.gotoState("+")), 0)
        self.assertEqual(spec.findStateIndex(itemSet.gotoState("+")), -1)

    def test_states(self):
        spec = lr0.Spec(expr.GRAMMAR, skinny=False)
        keys = [itemSet.key for itemSet in spec.states]
        self.assertEqual(
            keys,
            [
                ((0, 0), (1, 0), (2, 0), (3, 0)),
                ((0, 1), (1, 1)),
                ((2, 1),),
                ((3, 1),),
                ((1, 2), (3, 0)),
                ((1, 3),),
            ],
        )

    def test_dedup(self):
        for grammar, nstates in (
            (expr.GRAMMAR, 6),
            (arith.GRAMMAR, 12),
            (nullable.PARENS, 6),
        ):
            spec = lr0.Spec(grammar, skinny=False)
            states = spec.states
            self.assertEqual(len(states), nstates)
            self.assertEqual(len(set(states)), len(states))
            for i, itemSet in enumerate(states):
                self.assertEqual(spec.findStateIndex(itemSet), i)

    def test_epsilon_closure(self):
        spec = lr0.Spec("A -> eps\n", skinny=False)
        grammar = spec.grammar()
        prod = grammar.productions[1]
        self.assertEqual(prod.rhs, ())
        self.assertTrue(prod.item(0).complete)
        self.assertIn(prod.item(0), list(spec.states[0]))

        # The reduction is available in state 0 without any goto step.
        self.assertEqual(
            spec.actions()[0]["$"], lr0.ReduceAction(grammar.productions[1])
        )

    def test_skinny(self):
        spec = lr0.Spec(expr.GRAMMAR)
        self.assertRaises(lr0.SpecError, lambda: spec.states)
        self.assertEqual(
            repr(spec), "lr0.Spec: 6 states, 13 actions (0 collisions)"
        )


if __name__ == "__main__":
    unittest.main()
