import html
import logging
from collections import defaultdict
from contextlib import contextmanager
from io import StringIO
from typing import Any, Callable, Dict, Iterator, List, Tuple

from .dfa import Dfa

logger = logging.getLogger(__name__)

Generator = Callable[[Dfa], str]

HEADER = "Generated by lexgen. Do not edit."


class Buffer:
    def __init__(self, indent: int = 4):
        self._buffer = StringIO()
        self._indent = " " * indent
        self._level = 0

    @contextmanager
    def indent(self) -> Iterator[None]:
        self._level += 1
        yield
        self._level -= 1

    def skip(self, n: int = 1) -> None:
        self._buffer.write("\n" * n)

    def line(self, s: str, *args: Any, **kwargs: Any) -> None:
        if args or kwargs:
            s = s.format(*args, **kwargs)
        self._buffer.write(self._indent * self._level)
        self._buffer.write(s)
        self._buffer.write("\n")

    def lines(self, block: str) -> None:
        for s in block.splitlines():
            if s:
                self.line(s)
            else:
                self.skip()

    def getvalue(self) -> str:
        return self._buffer.getvalue()


def symbol_ranges(symbols: List[int]) -> List[Tuple[int, int]]:
    ranges: List[Tuple[int, int]] = []
    for symbol in sorted(symbols):
        if ranges and ranges[-1][1] == symbol - 1:
            ranges[-1] = (ranges[-1][0], symbol)
        else:
            ranges.append((symbol, symbol))
    return ranges


def fmt_char(code: int) -> str:
    char = chr(code)
    if char in "\\-[]":
        return "\\" + char
    return html.escape(char).encode("unicode_escape").decode("ascii")


def generate_dot(dfa: Dfa) -> str:
    buf = Buffer(2)
    buf.line("digraph dfa {")
    with buf.indent():
        buf.line("rankdir=LR")
        buf.line('"" [shape=none]')
        buf.line('"" -> "{}"', dfa.start)

        for state, _ in dfa.iter_states():
            tag = dfa.get_tag(state)
            if tag is None:
                buf.line('"{}" [shape=circle]', state)
            else:
                buf.line(
                    '"{}" [shape=doublecircle label=<{}/{}>]',
                    state, state, html.escape(tag.name)
                )

        for state, row in dfa.iter_states():
            grouped: Dict[int, List[int]] = defaultdict(list)
            for symbol, target in row.items():
                grouped[target].append(symbol)
            for target, symbols in sorted(grouped.items()):
                classes = []
                for start, end in symbol_ranges(symbols):
                    if start == end:
                        classes.append(fmt_char(start))
                    elif end - start < 3:
                        classes.append(
                            "".join(fmt_char(c) for c in range(start, end + 1))
                        )
                    else:
                        classes.append(fmt_char(start) + "-" + fmt_char(end))
                buf.line(
                    '"{}" -> "{}" [label=<[{}]>]',
                    state, target, "".join(classes)
                )

    buf.line("}")
    return buf.getvalue()


PYTHON_SCANNER = '''\
class Lexer:
    def __init__(self):
        self._transitions = TRANSITIONS
        self._accepts = ACCEPTS

    def tokenize(self, text):
        tokens = []
        pos = 0
        line = 1
        column = 1
        while pos < len(text):
            state = START_STATE
            last_pos = -1
            last_type = None
            for i in range(pos, len(text)):
                target = self._transitions[state].get(ord(text[i]))
                if target is None:
                    break
                state = target
                if state in self._accepts:
                    last_pos = i
                    last_type = self._accepts[state]
            if last_type is not None:
                lexeme = text[pos:last_pos + 1]
                tokens.append(Token(last_type, lexeme, line, column))
                end = last_pos + 1
            else:
                if text[pos] not in " \\t\\n":
                    print(
                        "Lexical error at line {}, column {}".format(
                            line, column),
                        file=sys.stderr
                    )
                end = pos + 1
            for char in text[pos:end]:
                if char == "\\n":
                    line += 1
                    column = 1
                else:
                    column += 1
            pos = end
        return tokens


def main():
    for token in Lexer().tokenize(sys.stdin.read()):
        print("<{}, {}>".format(token.type, token.lexeme))


if __name__ == "__main__":
    main()
'''


def generate_python(dfa: Dfa) -> str:
    buf = Buffer(4)
    buf.line("# {}", HEADER)
    buf.line("import sys")
    buf.line("from typing import NamedTuple")
    buf.skip(2)

    buf.line("class Token(NamedTuple):")
    with buf.indent():
        buf.line("type: str")
        buf.line("lexeme: str")
        buf.line("line: int")
        buf.line("column: int")
    buf.skip(2)

    buf.line("START_STATE = {}", dfa.start)
    buf.skip()

    buf.line("TRANSITIONS = [")
    with buf.indent():
        for state, row in dfa.iter_states():
            entries = ", ".join(
                "{}: {}".format(symbol, target)
                for symbol, target in sorted(row.items())
            )
            buf.line("{{{}}},  # {}", entries, state)
    buf.line("]")
    buf.skip()

    buf.line("ACCEPTS = {")
    with buf.indent():
        for state, tag in sorted(dfa.accepts.items()):
            buf.line("{}: {!r},", state, tag.name)
    buf.line("}")
    buf.skip(2)

    buf.lines(PYTHON_SCANNER)
    return buf.getvalue()


CPP_PRIVATE = '''\
int getNextState(int state, unsigned char symbol) const {
    auto it = transitionTable.find({state, symbol});
    if (it == transitionTable.end()) { return -1; }
    return it->second;
}
'''

CPP_PUBLIC = '''\
LexicalAnalyzer() {
    initializeTransitionTable();
    initializeAcceptingStates();
}

std::vector<Token> tokenize(const std::string &input) const {
    std::vector<Token> tokens;
    size_t pos = 0;
    int line = 1, column = 1;
    while (pos < input.size()) {
        int state = START_STATE;
        long lastAcceptPos = -1;
        std::string lastAcceptRule;
        for (size_t i = pos; i < input.size(); i++) {
            int next = getNextState(state, (unsigned char)input[i]);
            if (next == -1) { break; }
            state = next;
            auto it = stateToToken.find(state);
            if (it != stateToToken.end()) {
                lastAcceptPos = (long)i;
                lastAcceptRule = it->second;
            }
        }
        size_t end;
        if (lastAcceptPos != -1) {
            end = (size_t)lastAcceptPos + 1;
            tokens.push_back(
                {lastAcceptRule, input.substr(pos, end - pos), line, column});
        } else {
            char c = input[pos];
            if (c != ' ' && c != '\\t' && c != '\\n') {
                std::cerr << "Lexical error at line " << line
                          << ", column " << column << std::endl;
            }
            end = pos + 1;
        }
        for (; pos < end; pos++) {
            if (input[pos] == '\\n') {
                line++;
                column = 1;
            } else {
                column++;
            }
        }
    }
    return tokens;
}
'''

CPP_MAIN = '''\
int main() {
    LexicalAnalyzer analyzer;
    std::string input, line;
    while (std::getline(std::cin, line)) {
        input += line + "\\n";
    }
    for (const Token &token : analyzer.tokenize(input)) {
        std::cout << "<" << token.type << ", " << token.lexeme << ">"
                  << std::endl;
    }
    return 0;
}
'''


def cpp_char_literal(code: int) -> str:
    if 0x20 <= code < 0x7F:
        char = chr(code)
        if char in "'\\":
            char = "\\" + char
        return "'{}'".format(char)
    return "0x{:02X}".format(code)


def cpp_string_literal(s: str) -> str:
    chars = []
    for char in s:
        code = ord(char)
        if char in '"\\':
            chars.append("\\" + char)
        elif 0x20 <= code < 0x7F:
            chars.append(char)
        else:
            chars.append("\\{:03o}".format(code & 0xFF))
    return '"{}"'.format("".join(chars))


def generate_cpp(dfa: Dfa) -> str:
    buf = Buffer(4)
    buf.line("// {}", HEADER)
    buf.skip()
    for header in ("iostream", "map", "string", "utility", "vector"):
        buf.line("#include <{}>", header)
    buf.skip()

    buf.line("struct Token {")
    with buf.indent():
        buf.line("std::string type;")
        buf.line("std::string lexeme;")
        buf.line("int line;")
        buf.line("int column;")
    buf.line("};")
    buf.skip()

    buf.line("class LexicalAnalyzer {")
    buf.line("private:")
    with buf.indent():
        buf.line("static const int START_STATE = {};", dfa.start)
        buf.line(
            "std::map<std::pair<int, unsigned char>, int> transitionTable;"
        )
        buf.line("std::map<int, std::string> stateToToken;")
        buf.skip()

        buf.line("void initializeTransitionTable() {")
        with buf.indent():
            for state, row in dfa.iter_states():
                for symbol, target in sorted(row.items()):
                    buf.line(
                        "transitionTable[{{{}, {}}}] = {};",
                        state, cpp_char_literal(symbol), target
                    )
        buf.line("}")
        buf.skip()

        buf.line("void initializeAcceptingStates() {")
        with buf.indent():
            for state, tag in sorted(dfa.accepts.items()):
                buf.line(
                    "stateToToken[{}] = {};",
                    state, cpp_string_literal(tag.name)
                )
        buf.line("}")
        buf.skip()

        buf.lines(CPP_PRIVATE)
    buf.skip()
    buf.line("public:")
    with buf.indent():
        buf.lines(CPP_PUBLIC)
    buf.line("};")
    buf.skip()

    buf.lines(CPP_MAIN)
    return buf.getvalue()


TARGETS: Dict[str, Generator] = {
    "python": generate_python,
    "cpp": generate_cpp,
    "dot": generate_dot,
}

EXTENSIONS: Dict[str, str] = {
    "python": ".py",
    "cpp": ".cpp",
    "dot": ".dot",
}


def get_generator(target: str) -> Generator:
    try:
        return TARGETS[target]
    except KeyError:
        raise ValueError(
            "Unknown target {!r}, expected one of: {}".format(
                target, ", ".join(sorted(TARGETS))
            )
        ) from None


def write_scanner(dfa: Dfa, filename: str, target: str = "python") -> bool:
    source = get_generator(target)(dfa)
    try:
        with open(filename, "w") as fp:
            fp.write(source)
    except OSError as e:
        logger.error("Could not open file %s for writing: %s", filename, e)
        return False
    logger.info("Generated %s scanner: %s", target, filename)
    return True
