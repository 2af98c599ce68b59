from typing import Dict, Iterator, List

CONCAT = "·"
ESCAPE = "\\"

PRECEDENCE: Dict[str, int] = {"*": 3, CONCAT: 2, "|": 1}

NO_CONCAT_AFTER = ("(", "|")
NO_CONCAT_BEFORE = (")", "|", "*")


def split_atoms(regex: str, escape_concat: bool = True) -> Iterator[str]:
    it = iter(regex)
    for char in it:
        if char == ESCAPE:
            yield ESCAPE + next(it, ESCAPE)
        elif char == CONCAT and escape_concat:
            yield ESCAPE + CONCAT
        else:
            yield char


def postfix_atoms(postfix: str) -> Iterator[str]:
    return split_atoms(postfix, escape_concat=False)


def atom_symbol(atom: str) -> str:
    return atom[-1]


def is_operator(atom: str) -> bool:
    return atom in PRECEDENCE


def validate(regex: str) -> bool:
    depth = 0
    for atom in split_atoms(regex):
        if atom == "(":
            depth += 1
        elif atom == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def insert_concat(regex: str) -> List[str]:
    atoms = list(split_atoms(regex))
    result: List[str] = []
    for atom, next_atom in zip(atoms, atoms[1:] + [""]):
        result.append(atom)
        if next_atom and atom not in NO_CONCAT_AFTER and \
                next_atom not in NO_CONCAT_BEFORE:
            result.append(CONCAT)
    return result


def explicit_concat(regex: str) -> str:
    return "".join(insert_concat(regex))


def to_postfix(regex: str) -> str:
    output: List[str] = []
    stack: List[str] = []
    for atom in insert_concat(regex):
        if atom == "(":
            stack.append(atom)
        elif atom == ")":
            while stack and stack[-1] != "(":
                output.append(stack.pop())
            if stack:
                stack.pop()
        elif is_operator(atom):
            while stack and stack[-1] != "(" and \
                    PRECEDENCE[stack[-1]] >= PRECEDENCE[atom]:
                output.append(stack.pop())
            stack.append(atom)
        else:
            output.append(atom)
    while stack:
        atom = stack.pop()
        if atom != "(":
            output.append(atom)
    return "".join(output)
