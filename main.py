import sys

from rich.pretty import pprint

from argspell import *

parser = ArgParser(
    "cake baker",
    Section("General:"),
    Switch("help", "-h", "--help", descr="show this help"),
    Scalar("exit", "-e=", "--exit=", type=uint8, descr="exit code"),
    Section("Baking:"),
    Scalar("ratio", "-r=", type=float, default=0.5, descr="sugar ratio", validator=lambda v: 0 <= v <= 1),
    Scalar("flavour", "-f=", type=str, default="vanilla", descr="cake flavour"),
    colorful=True,
)


if __name__ == '__main__':
    try:
        files = parser.parse_positional()
        if parser.get_switch("help"):
            __import__("rich").print(parser)
            sys.exit(0)
        parser.validate()
    except ParserException as exception:
        report(exception, program=parser.program, fancy=True)
        sys.exit(1)
    pprint(parser.options)
    pprint(files)
