"""Pure lambda calculus terms and their normal-order reduction.

The `pure` directory contains pure lambda calculus term construction, scanning, parsing and reduction- no knowledge of
files, sessions or output formats (see `lang` for those).

Formally, pure lambda calculus can be defined as

```
<λ-term> ::= <variable>                 ; "variable"
           | "λ" <variable> "." <λ-term> ; "abstraction"
           | <λ-term> <λ-term>          ; "application"
```

Terms are immutable values: substitution and reduction always build new trees, and two terms are equal iff they are
structurally equal (no alpha-equivalence: λx.x != λy.y).

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from abc import ABC
from dataclasses import dataclass
from itertools import count


class LambdaTerm(ABC):
    """Represents a valid λ-term: variable, abstraction, or application.

    Every traversal below walks an explicit stack instead of recursing, so how deep a term can get is not bounded by
    Python's recursion limit (the Church numeral for 1000 is already 1000 applications deep).
    """

    def is_free(self, var):
        """Whether or not var occurs free in this term."""
        stack = [self]
        while stack:
            term = stack.pop()
            if isinstance(term, Variable):
                if term == var:
                    return True
            elif isinstance(term, Abstraction):
                if term.param != var:
                    stack.append(term.body)
            else:
                stack.extend((term.right, term.left))
        return False

    def free_variables(self):
        """Set of the variables that occur free in this term."""
        free = set()
        stack = [(self, frozenset())]
        while stack:
            term, bound = stack.pop()
            if isinstance(term, Variable):
                if term not in bound:
                    free.add(term)
            elif isinstance(term, Abstraction):
                stack.append((term.body, bound | {term.param}))
            else:
                stack.extend(((term.right, bound), (term.left, bound)))
        return free

    def _sub(self, var, new_term, fresh):
        """Capture-avoiding substitution of all free occurences of var with new_term. fresh is the FreshNames supply
        used when a bound variable has to be renamed.

        env maps each variable being replaced to (replacement, free variables of replacement). A binder that would
        capture one of those free variables gets a fresh name, and the renaming joins env for its body, so renaming
        and substitution happen in the same pass. Fresh names are handed out left to right.
        """
        results = []
        stack = [(_VISIT, self, {var: (new_term, new_term.free_variables())})]
        while stack:
            action, term, env = stack.pop()

            if action == _BUILD_ABSTRACTION:
                results.append(Abstraction(term, results.pop()))

            elif action == _BUILD_APPLICATION:
                right = results.pop()
                results.append(Application(results.pop(), right))

            elif isinstance(term, Variable):
                results.append(env[term][0] if term in env else term)

            elif isinstance(term, Abstraction):
                env = {key: value for key, value in env.items() if key != term.param}  # param shadows
                if not env:
                    results.append(term)
                    continue

                param = term.param
                if any(param in free for __, free in env.values()):
                    param = fresh()
                    env[term.param] = (param, {param})
                stack.append((_BUILD_ABSTRACTION, param, None))
                stack.append((_VISIT, term.body, env))

            else:
                stack.append((_BUILD_APPLICATION, None, None))
                stack.append((_VISIT, term.right, env))
                stack.append((_VISIT, term.left, env))

        return results.pop()

    def _step(self, fresh):
        """One normal-order rewrite of this term. Returns self (the same object) if there is nothing to rewrite.

        The redex is searched for along a single path: under every binder, and down the left spine of every
        application. An application whose head is not itself an application searches its argument instead, so the
        argument of an application with an application on its left is never searched.
        """
        path = []
        term = self
        while True:
            if isinstance(term, Abstraction):
                path.append(term)
                term = term.body
            elif isinstance(term, Application):
                if isinstance(term.left, Abstraction):
                    reduced = term.left.body._sub(term.left.param, term.right, fresh)
                    break
                path.append(term)
                term = term.left if isinstance(term.left, Application) else term.right
            else:
                return self

        for parent in reversed(path):
            if isinstance(parent, Abstraction):
                reduced = Abstraction(parent.param, reduced)
            elif isinstance(parent.left, Application):
                reduced = Application(reduced, parent.right)
            else:
                reduced = Application(parent.left, reduced)
        return reduced

    def __str__(self):
        """Fully parenthesized: (λx.body) and (left right)."""
        parts = []
        stack = [self]
        while stack:
            term = stack.pop()
            if isinstance(term, str):
                parts.append(term)
            elif isinstance(term, Variable):
                parts.append(term.name)
            elif isinstance(term, Abstraction):
                stack.extend((")", term.body, f"(λ{term.param.name}."))
            else:
                stack.extend((")", term.right, " ", term.left, "("))
        return "".join(parts)


# work items of LambdaTerm._sub
_VISIT, _BUILD_ABSTRACTION, _BUILD_APPLICATION = range(3)


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Variable in lambda calculus. Compared by name only."""
    name: str


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """Abstraction: λparam.body"""
    param: Variable
    body: LambdaTerm


@dataclass(frozen=True)
class Application(LambdaTerm):
    """Application of left to right. Multi-argument applications nest to the left: a b c = ((a b) c)."""
    left: LambdaTerm
    right: LambdaTerm


class FreshNames:
    """Monotonic supply of bound variable names `_0`, `_1`, ... Never hands out the same name twice."""
    PREFIX = "_"

    def __init__(self, start=0):
        self._counter = count(start)

    def __call__(self):
        return Variable(f"{FreshNames.PREFIX}{next(self._counter)}")


class NormalOrderReducer:
    """Implements normal-order beta reduction of a term.

    Reduction is split in two: `step` rewrites a single redex (leftmost-outermost, searching down the left spine), and
    `beta_reduce` calls `step` until the term stops changing. Only the latter can run forever.
    """

    def __init__(self, tree, fresh=None):
        self.tree = tree
        self.fresh = fresh if fresh is not None else FreshNames()

    def subst(self, term, var, new_term):
        """term[var := new_term]. var may be a Variable or a plain name."""
        if isinstance(var, str):
            var = Variable(var)
        return term._sub(var, new_term, self.fresh)

    def step(self, term):
        """Single normal-order reduction step of term."""
        return term._step(self.fresh)

    def beta_reduce(self):
        """Yields every rewrite of self.tree until a fixed point is reached. The fixed point itself (the normal form)
        is the last term yielded; if self.tree is already normal, nothing is yielded. Divergent terms yield forever.

        A fixed point is a term `step` leaves untouched. A redex that rewrites to an equal term, like
        (λx.x x) (λx.x x), is still a rewrite: it keeps going.
        """
        term = self.tree
        while True:
            reduced = self.step(term)
            if reduced is term:
                return
            yield reduced
            term = reduced

    def __repr__(self):
        return f"NormalOrderReducer({self.tree!r})"

    def __str__(self):
        return str(self.tree)
