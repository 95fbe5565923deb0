"""Token classifier for the source scroller's fake syntax highlighting."""

import re
from typing import List, Tuple

KEYWORDS = frozenset({
    'fn', 'let', 'mut', 'const', 'pub', 'use', 'mod', 'struct', 'enum',
    'impl', 'trait', 'async', 'await', 'return', 'if', 'else', 'match',
    'for', 'while', 'loop', 'break', 'continue', 'self', 'Self',
    'def', 'class', 'import', 'from', 'with', 'as',
    'SELECT', 'FROM', 'WHERE', 'JOIN', 'ON', 'AND', 'OR', 'ORDER', 'BY',
    'void', 'int', 'char', 'HANDLE', 'LPVOID', 'SIZE_T',
    'in', 'do', 'done', 'then', 'fi', 'echo',
})

TYPES = frozenset({
    'Result', 'Vec', 'String', 'Option', 'bool', 'u8', 'u16', 'u32', 'u64',
    'i8', 'i16', 'i32', 'i64', 'f32', 'f64', 'usize', 'isize',
    'str', 'bytes', 'dict', 'list', 'None', 'True', 'False',
})

_TOKEN_RE = re.compile(r"""
    (?P<comment>\#.*|//.*|--\s.*)
  | (?P<string>"[^"]*"?|'[^']*'?)
  | (?P<number>\b0x[0-9A-Fa-f]+\b|\b\d+(?:\.\d+)?\b)
  | (?P<word>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<space>\s+)
  | (?P<other>.)
""", re.VERBOSE)


def tokenize(line: str) -> List[Tuple[str, str]]:
    """
    Split a source line into (text, kind) pairs.

    Kinds: comment, string, number, keyword, type, function, plain.
    A word followed by '(' is treated as a function call.
    """
    tokens: List[Tuple[str, str]] = []
    for match in _TOKEN_RE.finditer(line):
        kind = match.lastgroup
        text = match.group()
        if kind == 'word':
            if text in KEYWORDS:
                kind = 'keyword'
            elif text in TYPES:
                kind = 'type'
            elif line[match.end():match.end() + 1] == '(':
                kind = 'function'
            else:
                kind = 'plain'
        elif kind in ('space', 'other'):
            kind = 'plain'
        tokens.append((text, kind))
    return tokens
