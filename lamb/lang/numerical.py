"""Natural numbers encoded as Church numerals: n = λf.λx.f (f (... (f x))) with n applications of f. Arithmetic is
not implemented here (see common/church.la): this module only recognizes and builds the encoding.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from lamb.lang.error import GenericException
from lamb.pure.lexical import Abstraction, Application, Variable


def cnumber(num):
    """Returns the Church numeral of natural number num (cnum = Church numeral)."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise GenericException("expected natural number, got '{}'", repr(num), internal=True)

    f, x = Variable("f"), Variable("x")
    body = x
    for __ in range(num):
        body = Application(f, body)
    return Abstraction(f, Abstraction(x, body))


def number(cnum):
    """Returns (n, True) if cnum is the Church numeral of n, else (0, False). Any other shape is simply not a numeral.
    """
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return 0, False

    first_arg = cnum.param
    second_arg = cnum.body.param
    nth_body = cnum.body.body

    num = 0
    while isinstance(nth_body, Application):
        if nth_body.left != first_arg:
            return 0, False
        nth_body = nth_body.right
        num += 1

    if nth_body != second_arg:
        return 0, False
    return num, True
