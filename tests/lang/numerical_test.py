import unittest

from lamb.lang.error import GenericException
from lamb.lang.numerical import cnumber, number
from lamb.lang.session import Session
from lamb.pure.lexical import Application, NormalOrderReducer, Variable
from lamb.pure.parser import Parser
from lamb.pure.scanner import Scanner


def term(expr):
    return Parser(Scanner(expr).scan()).parse()


class NumericalTestCase(unittest.TestCase):

    def test_cnumber(self):
        should_fail = [-2, 0.3, 4.0, "3", None, True]
        for case in should_fail:
            self.assertRaises(GenericException, cnumber, case)

        should_pass = {0: "\\f.\\x.x", 1: "\\f.\\x.f x", 3: "\\f.\\x.f (f (f (x)))"}
        for case, result in should_pass.items():
            self.assertEqual(term(result), cnumber(case), case)

    def test_number(self):
        should_pass = {
            "\\f.\\x.x": 0,
            "\\f.\\x.f x": 1,
            "\\f.\\x.f (f (f x))": 3,
            "\\s.\\z.s (s z)": 2,
            "\\_0.\\_1._0 _1": 1,
        }
        for case, result in should_pass.items():
            self.assertEqual((result, True), number(term(case)), case)

        should_fail = [
            "x", "\\x.x", "\\f.f", "f x",
            "\\f.\\x.f", "\\f.\\x.y", "\\f.\\x.f f", "\\f.\\x.x f x", "\\f.\\x.g x",
            "\\f.\\x.f (g x)", "\\f.\\x.(f f) x", "\\f.\\x.\\y.x", "\\f.\\x.f (\\y.x)", "\\f.\\x.(\\y.y) x",
        ]
        for case in should_fail:
            self.assertEqual((0, False), number(term(case)), case)

    def test_large(self):
        self.assertEqual((200, True), number(cnumber(200)))

    def test_deeper_than_recursion_limit(self):
        num = cnumber(3000)
        self.assertEqual((3000, True), number(num))
        self.assertEqual("(λf.(λx." + "(f " * 3000 + "x" + ")" * 3000 + "))", str(num))
        self.assertTrue(num.body.body.is_free(Variable("x")))

        succ = term("\\n.\\f.\\x.f (n f x)")
        steps = list(NormalOrderReducer(Application(succ, num)).beta_reduce())
        self.assertEqual(3, len(steps))
        self.assertEqual((3001, True), number(steps[-1]))
        self.assertTrue(Session.format_step(3, steps[-1]).endswith(" -> 3001"))


if __name__ == '__main__':
    unittest.main()
