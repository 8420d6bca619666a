"""Session control for la language: preprocessing of `#use` directives, scanning, parsing and the reduce/print loop,
either in command line mode or file interpretation mode.

Every input produces one line per rewrite:

```
R<n>: <term>[ -> <number>]
```

where the number is shown if <term> is a Church numeral. A lex or parse error produces a diagnosis (through the
session's ErrorHandler) and one blank line.
"""

import os
import re
import sys

from lamb.lang.error import GenericException, LexError, ParseError
from lamb.lang.numerical import number
from lamb.pure.lexical import FreshNames, NormalOrderReducer
from lamb.pure.parser import Parser
from lamb.pure.scanner import Scanner

COMMON = os.path.join(os.path.dirname(os.path.abspath(__file__)), os.pardir, "common")


class Session:
    """Governs a la session. All inputs run in a session share its supply of fresh variable names."""
    SH_FILE = "<in>"  # command-line interpreter filename
    EXT = ".la"
    USE = re.compile(r"#use\s+(\w+)")

    def __init__(self, error_handler, path=SH_FILE, out=None, common_path=COMMON):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                # used for error messages
        self.out = out if out is not None else sys.stdout
        self.common_path = common_path  # fallback directory for #use
        self.fresh = FreshNames()

    def load_file(self, name):
        """Returns the contents of file name. Names without a directory part that do not exist relative to the
        working directory are looked up in self.common_path.
        """
        path = name
        if not os.path.exists(path) and not os.path.dirname(name) and self.common_path:
            path = os.path.join(self.common_path, name)

        try:
            with open(path, "r") as file:
                return file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", name, diagnosis=False)

    def preprocess(self, source):
        """Replaces every `#use NAME` with the contents of NAME.la. Included text is not preprocessed again."""
        return Session.USE.sub(lambda match: self.load_file(match.group(1) + Session.EXT), source)

    def run(self, source):
        """Runs source through the whole pipeline, writing every rewrite step to self.out."""
        source = self.preprocess(source)

        try:
            tokens = Scanner(source).scan()
            if not tokens:
                return
            term = Parser(tokens, source).parse()
        except (LexError, ParseError) as error:
            self.report(error)
            self.emit()
            return

        reducer = NormalOrderReducer(term, self.fresh)

        rewrite = 0
        for rewrite, reduced in enumerate(reducer.beta_reduce(), 1):
            self.emit(Session.format_step(rewrite, reduced))

        if rewrite == 0:
            self.emit(Session.format_step(1, reducer.tree))  # already in normal form

    def run_file(self, path):
        """Runs the contents of file path."""
        self.run(self.load_file(path))

    def report(self, error):
        """Hands error to the error handler without leaving the session."""
        fatal = self.error_handler.fatal
        self.error_handler.fatal = False
        try:
            self.error_handler.throw(error)
        finally:
            self.error_handler.fatal = fatal

    def emit(self, line=""):
        print(line, file=self.out, flush=True)

    @staticmethod
    def format_step(rewrite, term):
        line = f"R{rewrite}: {term}"
        num, is_number = number(term)
        if is_number:
            line += f" -> {num}"
        return line
