import unittest
from itertools import islice

from lamb.pure.lexical import Abstraction, Application, FreshNames, NormalOrderReducer, Variable
from lamb.pure.parser import Parser
from lamb.pure.scanner import Scanner


def term(expr):
    return Parser(Scanner(expr).scan(), expr).parse()


def reductions(expr, limit=1000):
    return [str(reduced) for reduced in islice(NormalOrderReducer(term(expr)).beta_reduce(), limit)]


class LambdaTermTestCase(unittest.TestCase):

    def test_str(self):
        cases = {
            "x": "x",
            "\\x.x": "(λx.x)",
            "f x": "(f x)",
            "a b c": "((a b) c)",
            "a (b c)": "(a (b c))",
            "\\f.\\x.f (f x)": "(λf.(λx.(f (f x))))",
            "(\\x.x) y": "((λx.x) y)",
            "\\x.x y": "(λx.(x y))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(term(case)), case)

    def test_eq(self):
        self.assertEqual(Abstraction(Variable("x"), Variable("x")), term("\\x.x"))
        self.assertEqual(hash(term("f (\\x.x)")), hash(term("f (\\x.x)")))

        should_differ = [("\\x.x", "\\y.y"), ("x", "y"), ("a b", "b a"), ("x", "\\x.x")]
        for left, right in should_differ:
            self.assertNotEqual(term(left), term(right), (left, right))

    def test_is_free(self):
        should_pass = ["x", "x y", "y x", "\\y.x", "(\\x.x) x", "\\y.\\z.z x"]
        for case in should_pass:
            self.assertTrue(term(case).is_free(Variable("x")), case)

        should_fail = ["y", "\\x.x", "\\x.x y", "\\y.\\x.x", "(\\x.x) y"]
        for case in should_fail:
            self.assertFalse(term(case).is_free(Variable("x")), case)

    def test_free_variables(self):
        cases = {
            "x": {"x"},
            "\\x.x": set(),
            "\\x.x y": {"y"},
            "(\\x.x) x": {"x"},
            "f (\\y.\\z.z y x) y": {"f", "x", "y"},
        }
        for case, expected in cases.items():
            self.assertEqual({Variable(name) for name in expected}, term(case).free_variables(), case)

    def test_immutable(self):
        with self.assertRaises(AttributeError):
            Variable("x").name = "y"


class FreshNamesTestCase(unittest.TestCase):

    def test_monotonic(self):
        fresh = FreshNames()
        self.assertEqual([Variable("_0"), Variable("_1"), Variable("_2")], [fresh() for __ in range(3)])

    def test_independent(self):
        first, second = FreshNames(), FreshNames()
        first()
        self.assertEqual(Variable("_0"), second())
        self.assertEqual(Variable("_1"), first())


class NormalOrderReducerTestCase(unittest.TestCase):

    def setUp(self):
        self.reducer = NormalOrderReducer(Variable("x"))

    def test_subst_variable(self):
        for case in ["y", "\\x.x", "a (b c)", "\\y.x y"]:
            new_term = term(case)
            self.assertEqual(new_term, self.reducer.subst(Variable("x"), "x", new_term), case)
            self.assertEqual(Variable("y"), self.reducer.subst(Variable("y"), "x", new_term), case)

    def test_subst(self):
        cases = {
            ("x y", "z"): "(z y)",
            ("\\x.x", "z"): "(λx.x)",             # x is bound: nothing to substitute
            ("\\y.x", "z"): "(λy.z)",
            ("\\y.x y", "\\a.a"): "(λy.((λa.a) y))",
            ("\\y.\\x.x", "z"): "(λy.(λx.x))",
        }
        for (case, new_term), expected in cases.items():
            self.assertEqual(expected, str(self.reducer.subst(term(case), Variable("x"), term(new_term))), case)

    def test_subst_avoids_capture(self):
        renamed = self.reducer.subst(term("\\y.x y"), "x", Variable("y"))
        self.assertEqual("(λ_0.(y _0))", str(renamed))

        # every renaming uses a new name
        renamed = self.reducer.subst(term("\\y.x y"), "x", Variable("y"))
        self.assertEqual("(λ_1.(y _1))", str(renamed))

    def test_step(self):
        cases = {
            "x": "x",
            "\\x.x": "(λx.x)",
            "(\\x.x) y": "y",
            "(\\x.x x) y": "(y y)",
            "(\\x.z) ((\\x.x x) (\\x.x x))": "z",           # normal order: the argument is never evaluated
            "\\a.(\\x.x) b": "(λa.b)",                      # reduces under binders
            "(\\x.x) a ((\\y.y) b)": "(a ((λy.y) b))",      # only one redex at a time
            "f ((\\x.x) y)": "(f y)",                       # stuck head: search the argument
            "(f a) ((\\x.x) y)": "((f a) ((λx.x) y))",      # left spine is searched, argument is not
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(self.reducer.step(term(case))), case)

    def test_step_is_pure(self):
        original = term("(\\x.x x) (\\y.y)")
        snapshot = str(original)
        self.reducer.step(original)
        self.assertEqual(snapshot, str(original))

    def test_beta_reduce(self):
        self.assertEqual([], reductions("x"))
        self.assertEqual([], reductions("\\x.x"))
        self.assertEqual(["y"], reductions("(\\x.x) y"))
        self.assertEqual(["(((λy.y) (λx.x)) z)", "((λx.x) z)", "z"], reductions("(\\x.\\y.y) a (\\x.x) z"))
        self.assertEqual([], reductions("(f a) ((\\x.x) y)"))

    def test_step_normal_form(self):
        for case in ["x", "\\x.x", "f (\\x.x y)", "(f a) ((\\x.x) y)"]:
            normal = term(case)
            self.assertIs(normal, self.reducer.step(normal), case)

    def test_capture_avoidance(self):
        self.assertEqual(["(λ_0.y)"], reductions("(\\x.\\y.x) y"))

    def test_let(self):
        self.assertEqual(reductions("(\\x.f x x) (g a)"), reductions("let x = g a in f x x"))
        self.assertEqual(["(f (g a))"], reductions("let x = g a in f x"))

    def test_church_numerals(self):
        steps = reductions("let 0=\\f.\\x.x in let succ=\\n.\\f.\\x.f (n f x) in succ (succ 0)")
        self.assertEqual(8, len(steps))
        self.assertEqual("(λf.(λx.(f (f x))))", steps[-1])

    def test_divergence(self):
        omega = term("(\\x.x x)(\\x.x x)")
        steps = list(islice(NormalOrderReducer(omega).beta_reduce(), 50))
        self.assertEqual(50, len(steps))
        self.assertTrue(all(step == omega for step in steps))

    def test_divergence_growing(self):
        steps = list(islice(NormalOrderReducer(term("(\\x.x x x)(\\x.x x x)")).beta_reduce(), 20))
        self.assertEqual(20, len(steps))
        self.assertLess(len(str(steps[0])), len(str(steps[-1])))

    def test_shared_fresh_names(self):
        fresh = FreshNames()
        first = list(NormalOrderReducer(term("(\\x.\\y.x) y"), fresh).beta_reduce())
        second = list(NormalOrderReducer(term("(\\x.\\y.x) y"), fresh).beta_reduce())
        self.assertEqual(["(λ_0.y)"], [str(reduced) for reduced in first])
        self.assertEqual(["(λ_1.y)"], [str(reduced) for reduced in second])


if __name__ == '__main__':
    unittest.main()
