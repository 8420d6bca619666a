"""Uses implementation of pure lambda calculus/la language to interpret .la files, evaluate a single expression or run
in command-line mode. Also uses error handling context manager. Called from the lamb console script.
"""

import argparse
import sys

from lamb.lang.error import ErrorHandler
from lamb.lang.session import COMMON, Session
from lamb.lang.shell import Shell


def get_parser():
    parser = argparse.ArgumentParser(prog="lamb", description="Step-by-step normal-order lambda calculus evaluator.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    source.add_argument("-e", "--eval", metavar="CODE", help="evaluate CODE instead of a file")
    parser.add_argument("--lib", metavar="DIR", default=COMMON,
                        help="directory searched by '#use NAME' when NAME.la is not in the working directory")
    return parser


def main(argv=None):
    """Runs la interpreter. Called from lamb executable script."""
    assert sys.version_info >= (3, 8), "lamb cannot be run with python < 3.8"

    args = get_parser().parse_args(argv)

    with ErrorHandler() as error_handler:
        if args.eval is not None:
            Session(error_handler, "<arg>", common_path=args.lib).run(args.eval)

        elif args.file is not None:
            Session(error_handler, args.file, common_path=args.lib).run_file(args.file)

        else:
            error_handler.fatal = False
            Shell(Session(error_handler, Session.SH_FILE, common_path=args.lib)).cmdloop()


if __name__ == "__main__":
    main()
