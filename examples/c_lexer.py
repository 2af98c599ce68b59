from lexgen import C_LIKE_RULES, LexerGenerator


def main() -> None:
    lex = LexerGenerator()
    for name, pattern in C_LIKE_RULES:
        lex.add_rule(name, pattern)
    lex.build()

    lex.write("c_lexer.dot", "dot")
    lex.write("c_lexer.cpp", "cpp")
    lex.write("c_lexer.py", "python")


if __name__ == "__main__":
    main()
