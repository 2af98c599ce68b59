import argparse
import logging
import sys
from typing import List, Optional

from .codegen import EXTENSIONS, TARGETS
from .display import format_dfa, format_nfa
from .generator import LexerGenerator
from .rules import PRESETS, RulePair, load_rules


def add_rules_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r", "--rules",
        help="JSON file with an ordered list of token rules."
    )
    parser.add_argument(
        "--preset", choices=sorted(PRESETS),
        help="Use a predefined rule set instead of a rules file."
    )
    parser.add_argument(
        "--max-states", type=int, default=None,
        help="Fail the build when the DFA grows beyond this many states."
    )


def get_rules(args: argparse.Namespace) -> List[RulePair]:
    if args.preset:
        return list(PRESETS[args.preset])
    if not args.rules:
        raise ValueError("either a rules file or --preset is required")
    return load_rules(args.rules)


def build_generator(args: argparse.Namespace) -> LexerGenerator:
    if args.max_states is None:
        generator = LexerGenerator()
    else:
        generator = LexerGenerator(args.max_states)
    for name, pattern in get_rules(args):
        generator.add_rule(name, pattern)
    generator.build()
    return generator


def run_build(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    output = args.out or "lexer" + EXTENSIONS[args.target]
    if not generator.write(output, args.target):
        return 1
    print("Generated {} scanner: {}".format(args.target, output))
    return 0


def run_tokenize(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    if args.input:
        with open(args.input) as fp:
            text = fp.read()
    else:
        text = sys.stdin.read()
    for token in generator.tokenize(text):
        print("{}\t{}\t{}:{}".format(
            token.type, token.lexeme, token.line, token.column
        ))
    return 0


def run_show(args: argparse.Namespace) -> int:
    generator = build_generator(args)
    show_all = not (args.nfa or args.dfa)
    if args.nfa or show_all:
        print(format_nfa(generator.nfa))
    if args.dfa or show_all:
        print(format_dfa(generator.dfa))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="lexgen",
        description="Generate a DFA-driven lexical analyzer from regexes."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log build progress."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build", help="Write a standalone scanner."
    )
    add_rules_arguments(build_parser)
    build_parser.add_argument(
        "-t", "--target", choices=sorted(TARGETS), default="python",
        help="Language of the generated scanner."
    )
    build_parser.add_argument(
        "-o", "--out", help="Output file (default: lexer.<ext>)."
    )
    build_parser.set_defaults(run=run_build)

    tokenize_parser = subparsers.add_parser(
        "tokenize", help="Tokenize a file with the built lexer."
    )
    add_rules_arguments(tokenize_parser)
    tokenize_parser.add_argument(
        "input", nargs="?", help="Input file (default: standard input)."
    )
    tokenize_parser.set_defaults(run=run_tokenize)

    show_parser = subparsers.add_parser(
        "show", help="Print the NFA and DFA of the built lexer."
    )
    add_rules_arguments(show_parser)
    show_parser.add_argument("--nfa", action="store_true")
    show_parser.add_argument("--dfa", action="store_true")
    show_parser.set_defaults(run=run_show)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s"
    )

    try:
        return args.run(args)
    except (ValueError, OSError) as e:
        print("error: {}".format(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
