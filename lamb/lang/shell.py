"""Handles interactive/command-line mode for la interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary la input. Lines with unclosed parentheses continue on the next line."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line

            if line.count("(") > line.count(")"):
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            self.sess.run(line)

    def parseline(self, line):
        """Every line is la input, except for help/?, exit and EOF. '!' is part of la identifiers, not a shell escape.
        """
        if self._tmp_line:
            return None, None, line
        command, arg, parsed = super().parseline(line)
        if command not in ("help", "exit", "EOF"):
            return None, None, line
        return command, arg, parsed

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the la interpreter!\n\n"
              "Write lambda terms with '\\' for λ: '\\x.x' is the identity. Application is \n"
              "juxtaposition and associates to the left, 'let x = N in M' binds x to N in M, and \n"
              "'#use church' pastes in the Church encodings from church.la. Every rewrite of \n"
              "your term is printed, along with its value if it is a Church numeral.\n\n"
              "Try it out by typing '#use church succ (succ 0)'. Press Ctrl-C to stop a term \n"
              "that does not terminate.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
