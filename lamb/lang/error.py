"""Error handling for the la language. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Lex and parse errors are fatal to the current input only. Whether they are fatal to the whole process is decided by
the ErrorHandler that catches them (files: fatal, shell: not fatal).
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a la error."""

    def __init__(self, msg, exprs=None, start=0, end=-1, line=None, column=None, context=None, diagnosis=True,
                 internal=False):
        """exprs are formatted into msg (bolded). context is the source line shown in the diagnosis; it defaults to
        the first of exprs.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.plain_msg = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = context if context is not None else exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.line = line
        self.column = column
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.plain_msg)


class LexError(GenericException):
    """Unrecognized character. Carries the tokens scanned before the failure."""

    def __init__(self, char, line, column, context, tokens):
        super().__init__("unrecognized character '{}'", char, start=column - 1, end=column, line=line, column=column,
                         context=context)
        self.char = char
        self.tokens = tokens


class ParseError(GenericException):
    """Unexpected or missing token. Reported at the offending token."""

    def __init__(self, msg, token, context=None, exprs=None):
        start = token.column - 1 if context is not None else 0
        super().__init__(msg, exprs if exprs is not None else "", start=start, end=start + len(token.text),
                         line=token.line, column=token.column, context=context if context is not None else "")
        self.token = token


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom la errors."""
    ERROR = "red"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream if stream is not None else sys.stdout
        self.path = None

    def register_file(self, path):
        """Registers path as the origin of subsequent errors."""
        self.path = path

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded, with a caret line underneath."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def location(self, error):
        """'path:line:col: ' prefix for error, or whatever part of it is known."""
        parts = [str(part) for part in (self.path, error.line, error.column) if part is not None]
        return colored(":".join(parts) + ": ", attrs=["bold"]) if parts else ""

    def throw(self, error):
        """Throws error. error must be a GenericException. Exits the process if this handler is fatal."""
        error_msg = self.location(error)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=self.stream)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error), file=self.stream)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("term is too deeply nested: maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
