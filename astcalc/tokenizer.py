import re
from typing import Optional

WHITESPACE = " \t\n\r\f\v"

IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")

# sign is part of the literal, there is no unary minus
NUMBER_RE = re.compile(r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|(?i:inf(?:inity)?|nan))")


class Scanner:
    """Skip-whitespace token stream over a single line of input.

    Tokens are produced on demand by the parser asking for a particular kind
    of token at the current position; each request returns the matched lexeme
    or None. A request that does not match leaves the position where it was
    (apart from skipped whitespace), and the parser can rewind to any earlier
    position with `mark()` / `reset()`. Only ASCII whitespace separates tokens.
    """

    def __init__(self, code: str) -> None:
        self.code = code
        self.pos = 0

    def mark(self) -> int:
        return self.pos

    def reset(self, pos: int) -> None:
        self.pos = pos

    def skip_whitespace(self) -> int:
        while self.pos < len(self.code) and self.code[self.pos] in WHITESPACE:
            self.pos += 1
        return self.pos

    def at_end(self) -> bool:
        return self.skip_whitespace() >= len(self.code)

    def literal(self, text: str) -> Optional[str]:
        start = self.skip_whitespace()
        if not self.code.startswith(text, start):
            return None
        self.pos = start + len(text)
        return text

    def identifier(self) -> Optional[str]:
        return self._match(IDENTIFIER_RE)

    def number(self) -> Optional[str]:
        return self._match(NUMBER_RE)

    def _match(self, pattern: re.Pattern[str]) -> Optional[str]:
        match = pattern.match(self.code, self.skip_whitespace())
        if match is None:
            return None
        self.pos = match.end()
        return match.group()
