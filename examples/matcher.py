from lexgen import format_dfa, generate_dot, make_lexer


def main() -> None:
    lex = make_lexer([("abb", "(a|b)*abb")])
    print(format_dfa(lex))

    with open("matcher.dot", "w") as fp:
        fp.write(generate_dot(lex))


if __name__ == "__main__":
    main()
