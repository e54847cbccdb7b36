#!/usr/bin/env python3
# kate: replace-tabs on; indent-width 4;

"""
Regular Expression Dialect Rewriting
====================================

Validation rules write their `pattern` constraints in a Perl-compatible
dialect (the syntax of Python's `re` module). JSON Schema validators expect
ECMAScript patterns instead. The two dialects agree on most syntax but not
all of it: ECMAScript has no inline flags, `.` never matches a newline,
`\\A`/`\\Z` do not exist, named groups are spelled differently, and so on.

Rather than patching the pattern text, the pattern is parsed into a syntax
tree and the tree is rendered back out in the target dialect.

Syntax Tree
-----------
The parser normalises the tree the way a syntax-tree regex parser does:

- non-capturing groups disappear (they only establish precedence)
- adjacent literal characters merge into a single multi-character literal
- nested concatenations and alternations are flattened
- flags are resolved into the nodes they affect (`i` on literals and
  classes, `s` on `.`, `m` on `^` and `$`)

Because the original grouping is gone after parsing, the renderer must
re-introduce non-capturing groups wherever precedence requires them.

Known Differences
-----------------
- Outside multiline mode `$` in `re` also matches just before a trailing
  newline. It is rendered as ECMAScript `$`, which only matches at the very
  end, so `^a$` no longer accepts "a\\n".
- Case-insensitive matching is rendered as explicit character alternatives.
  Besides the lower/upper case pair of each character, the extra Unicode
  equivalences `re` applies (KELVIN SIGN for k, long s for s, and so on;
  see FOLD_GROUPS) are added unless the ASCII flag is set.

Main Flow
---------
1. Compile the pattern with `re` so malformed text is reported by the
   source engine itself
2. Parse the pattern into a RegexNode tree
3. Render the tree as ECMAScript text
"""

import re
import unicodedata
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple, Union

from .context import Context

# =============================================================================
# MODULE CONSTANTS
# =============================================================================

# Characters escaped when a literal is embedded in a pattern.
META_CHARS = frozenset('\\.+*?()|[]{}^$')

# Characters escaped inside a character class.
CLASS_META_CHARS = frozenset('\\]^-[')

CLASS_ESCAPES = frozenset('dDwWsS')

FLAG_CHARS = frozenset('aiLmsux')

CONTROL_ESCAPES = {
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\f': '\\f',
    '\v': '\\v',
}

SIMPLE_ESCAPES = {
    'a': '\a',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
    'v': '\v',
}

HEX_ESCAPE_DIGITS = {'x': 2, 'u': 4, 'U': 8}

# Characters that match each other under re.IGNORECASE although
# str.lower()/str.upper() do not map one onto the other.
FOLD_GROUPS = [
    'Ii\u0131',              # dotless i
    'Kk\u212a',              # KELVIN SIGN
    'Ss\u017f',              # long s
    '\u00c5\u00e5\u212b',    # ANGSTROM SIGN
    '\u00b5\u039c\u03bc',    # MICRO SIGN
    '\u03a9\u03c9\u2126',    # OHM SIGN
    '\u0345\u0399\u03b9\u1fbe',
    '\u0392\u03b2\u03d0',
    '\u0395\u03b5\u03f5',
    '\u0398\u03b8\u03d1\u03f4',
    '\u039a\u03ba\u03f0',
    '\u03a0\u03c0\u03d6',
    '\u03a1\u03c1\u03f1',
    '\u03a3\u03c2\u03c3',
    '\u03a6\u03c6\u03d5',
    '\u1e60\u1e61\u1e9b',
]

EXTRA_FOLDS = {ch: group for group in FOLD_GROUPS for ch in group}

OCT_DIGITS = frozenset('01234567')

_REPEAT_RE = re.compile(r'\{(\d*)(?:(,)(\d*))?\}')


class RegexOp(IntEnum):
    """
    Syntax tree operators, ordered by structural rank.

    Everything ranked above CAPTURE is a composite that needs explicit
    grouping when it becomes the operand of a quantifier.
    """
    EMPTY_MATCH = 1
    LITERAL = 2
    CHAR_CLASS = 3
    ANY_CHAR_NOT_NL = 4
    ANY_CHAR = 5
    BEGIN_LINE = 6
    END_LINE = 7
    BEGIN_TEXT = 8
    END_TEXT = 9
    WORD_BOUNDARY = 10
    NO_WORD_BOUNDARY = 11
    BACKREF = 12
    LOOKAROUND = 13
    CAPTURE = 14
    STAR = 15
    PLUS = 16
    QUEST = 17
    REPEAT = 18
    CONCAT = 19
    ALTERNATE = 20


QUANTIFIER_OPS = frozenset([RegexOp.STAR, RegexOp.PLUS, RegexOp.QUEST, RegexOp.REPEAT])

# A class item is either an inclusive (lo, hi) character range or a
# class escape such as '\\d'.
ClassItem = Union[Tuple[str, str], str]


class RegexSyntaxError(ValueError):
    """Pattern text that cannot be represented as a syntax tree."""

    def __init__(self, msg: str, pos: int):
        super().__init__(f"{msg} at position {pos}")
        self.pos = pos


@dataclass
class RegexNode:
    """
    A node of the regular expression syntax tree.

    Attributes:
        op: The operator
        sub: Owned child nodes (one for captures, quantifiers and
             lookarounds; several for concatenation and alternation)
        chars: Characters of a LITERAL run
        items: Items of a CHAR_CLASS
        negate: CHAR_CLASS is negated
        fold: LITERAL or CHAR_CLASS matches case-insensitively
        ascii: Case folding is limited to ASCII letters
        min: Lower bound of a REPEAT
        max: Upper bound of a REPEAT, negative when unbounded
        lazy: Quantifier prefers the shortest match
        name: Group name of a CAPTURE, or the reference of a BACKREF
        look: Kind of LOOKAROUND: '=', '!', '<=' or '<!'
    """
    op: RegexOp
    sub: List['RegexNode'] = field(default_factory=list)
    chars: str = ''
    items: List[ClassItem] = field(default_factory=list)
    negate: bool = False
    fold: bool = False
    ascii: bool = False
    min: int = 0
    max: int = 0
    lazy: bool = False
    name: Optional[str] = None
    look: str = ''


# =============================================================================
# PARSER
# =============================================================================

class _Parser:
    """
    Recursive descent parser for the `re` pattern syntax.

    Grammar (roughly):
        pattern     -> alternation
        alternation -> concat ('|' concat)*
        concat      -> term*
        term        -> atom quantifier?
        atom        -> literal | escape | class | group | '.' | '^' | '$'
        quantifier  -> ('*' | '+' | '?' | '{m}' | '{m,}' | '{,n}' | '{m,n}') '?'?
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0
        self.length = len(pattern)
        self.flags = frozenset()

    def parse(self) -> RegexNode:
        node = self._parse_alternation()
        if self.pos < self.length:
            raise RegexSyntaxError("unbalanced parenthesis", self.pos)
        return node

    def _peek(self, offset: int = 0) -> Optional[str]:
        pos = self.pos + offset
        if pos < self.length:
            return self.pattern[pos]
        return None

    def _advance(self, count: int = 1) -> None:
        self.pos += count

    def _match(self, s: str) -> bool:
        if self.pattern.startswith(s, self.pos):
            self.pos += len(s)
            return True
        return False

    def _expect(self, s: str) -> None:
        if not self._match(s):
            raise RegexSyntaxError(f"expected {s!r}", self.pos)

    def _skip_verbose(self) -> None:
        if 'x' not in self.flags:
            return
        while self.pos < self.length:
            ch = self.pattern[self.pos]
            if ch.isspace():
                self._advance()
            elif ch == '#':
                end = self.pattern.find('\n', self.pos)
                self.pos = self.length if end < 0 else end + 1
            else:
                break

    def _parse_alternation(self) -> RegexNode:
        branches = [self._parse_concat()]
        while self._match('|'):
            branches.append(self._parse_concat())

        if len(branches) == 1:
            return branches[0]

        flat: List[RegexNode] = []
        for branch in branches:
            if branch.op == RegexOp.ALTERNATE:
                flat.extend(branch.sub)
            else:
                flat.append(branch)
        return RegexNode(RegexOp.ALTERNATE, sub=flat)

    def _parse_concat(self) -> RegexNode:
        terms: List[RegexNode] = []
        while True:
            self._skip_verbose()
            ch = self._peek()
            if ch is None or ch in '|)':
                break
            atom = self._parse_atom()
            if atom is None:
                # Comments and flag groups leave the previous term open to a quantifier
                if terms:
                    terms[-1] = self._parse_term(terms[-1])
                continue
            terms.append(self._parse_term(atom))
        return _concat(terms)

    def _parse_term(self, atom: RegexNode) -> RegexNode:
        self._skip_verbose()
        quantifier = self._parse_quantifier()
        if quantifier is None:
            return atom

        op, lo, hi = quantifier
        lazy = self._match('?')
        if self._peek() == '+':
            raise RegexSyntaxError("possessive quantifiers are not supported", self.pos)

        # Repeating nothing still matches nothing
        if atom.op == RegexOp.EMPTY_MATCH:
            return atom
        return RegexNode(op, sub=[atom], min=lo, max=hi, lazy=lazy)

    def _parse_quantifier(self) -> Optional[Tuple[RegexOp, int, int]]:
        ch = self._peek()
        if ch == '*':
            self._advance()
            return RegexOp.STAR, 0, -1
        if ch == '+':
            self._advance()
            return RegexOp.PLUS, 1, -1
        if ch == '?':
            self._advance()
            return RegexOp.QUEST, 0, 1
        if ch == '{':
            m = _REPEAT_RE.match(self.pattern, self.pos)
            if m is None or m.group(0) == '{}':
                return None
            lo_text, comma, hi_text = m.groups()
            lo = int(lo_text) if lo_text else 0
            if comma:
                hi = int(hi_text) if hi_text else -1
            else:
                hi = lo
            self.pos = m.end()
            return RegexOp.REPEAT, lo, hi
        return None

    def _parse_atom(self) -> Optional[RegexNode]:
        ch = self._peek()

        if ch == '(':
            return self._parse_group()
        if ch == '[':
            return self._parse_class()
        if ch == '\\':
            return self._parse_escape()

        self._advance()
        if ch == '.':
            return RegexNode(RegexOp.ANY_CHAR if 's' in self.flags else RegexOp.ANY_CHAR_NOT_NL)
        if ch == '^':
            return RegexNode(RegexOp.BEGIN_LINE if 'm' in self.flags else RegexOp.BEGIN_TEXT)
        if ch == '$':
            return RegexNode(RegexOp.END_LINE if 'm' in self.flags else RegexOp.END_TEXT)
        if ch in '*+?':
            raise RegexSyntaxError("nothing to repeat", self.pos - 1)
        return self._literal(ch)

    def _literal(self, ch: str) -> RegexNode:
        return RegexNode(RegexOp.LITERAL, chars=ch,
                         fold='i' in self.flags, ascii='a' in self.flags)

    def _parse_group(self) -> Optional[RegexNode]:
        start = self.pos
        self._expect('(')

        if not self._match('?'):
            return RegexNode(RegexOp.CAPTURE, sub=[self._parse_group_body()])

        if self._match(':'):
            return self._parse_group_body()

        if self._match('P<'):
            name = self._read_name('>')
            return RegexNode(RegexOp.CAPTURE, sub=[self._parse_group_body()], name=name)

        if self._match('P='):
            name = self._read_name(')')
            return RegexNode(RegexOp.BACKREF, name=name)

        if self._match('#'):
            end = self.pattern.find(')', self.pos)
            if end < 0:
                raise RegexSyntaxError("missing ), unterminated comment", start)
            self.pos = end + 1
            return None

        for look in ('=', '!', '<=', '<!'):
            if self._match(look):
                return RegexNode(RegexOp.LOOKAROUND, sub=[self._parse_group_body()], look=look)

        if self._peek() == '(':
            raise RegexSyntaxError("conditional groups are not supported", start)
        if self._peek() == '>':
            raise RegexSyntaxError("atomic groups are not supported", start)

        return self._parse_flags(start)

    def _parse_group_body(self) -> RegexNode:
        saved = self.flags
        node = self._parse_alternation()
        self._expect(')')
        self.flags = saved
        return node

    def _parse_flags(self, start: int) -> Optional[RegexNode]:
        on = set()
        off = set()
        target = on
        while True:
            ch = self._peek()
            if ch is None:
                raise RegexSyntaxError("missing -, : or )", self.pos)
            self._advance()
            if ch in FLAG_CHARS:
                target.add(ch)
            elif ch == '-' and target is on:
                target = off
            elif ch == ':':
                saved = self.flags
                self.flags = (self.flags | on) - off
                node = self._parse_alternation()
                self._expect(')')
                self.flags = saved
                return node
            elif ch == ')' and not off:
                self.flags = self.flags | on
                return None
            else:
                raise RegexSyntaxError("unknown extension ?" + ch, start + 1)

    def _read_name(self, terminator: str) -> str:
        end = self.pattern.find(terminator, self.pos)
        if end < 0:
            raise RegexSyntaxError(f"missing {terminator}, unterminated name", self.pos)
        name = self.pattern[self.pos:end]
        if not name.isidentifier():
            raise RegexSyntaxError(f"bad character in group name {name!r}", self.pos)
        self.pos = end + 1
        return name

    def _parse_escape(self) -> RegexNode:
        start = self.pos
        self._expect('\\')
        ch = self._peek()
        if ch is None:
            raise RegexSyntaxError("bad escape (end of pattern)", start)

        if ch == 'A':
            self._advance()
            return RegexNode(RegexOp.BEGIN_TEXT)
        if ch in 'Zz':
            self._advance()
            return RegexNode(RegexOp.END_TEXT)
        if ch == 'b':
            self._advance()
            return RegexNode(RegexOp.WORD_BOUNDARY)
        if ch == 'B':
            self._advance()
            return RegexNode(RegexOp.NO_WORD_BOUNDARY)
        if ch in CLASS_ESCAPES:
            self._advance()
            return RegexNode(RegexOp.CHAR_CLASS, items=['\\' + ch])
        if ch in '123456789' and not self._is_octal_escape():
            digits = ch
            self._advance()
            if self._peek() is not None and self._peek().isdigit():
                digits += self._peek()
                self._advance()
            return RegexNode(RegexOp.BACKREF, name=digits)

        return self._literal(self._parse_char_escape(start))

    def _is_octal_escape(self) -> bool:
        # \NNN with three octal digits is a character, anything else a backreference
        text = self.pattern[self.pos:self.pos + 3]
        return len(text) == 3 and all(c in OCT_DIGITS for c in text)

    def _parse_char_escape(self, start: int) -> str:
        """Parse an escape that stands for one character; the backslash is consumed."""
        ch = self._peek()
        self._advance()

        if ch in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[ch]
        if ch in HEX_ESCAPE_DIGITS:
            count = HEX_ESCAPE_DIGITS[ch]
            digits = self.pattern[self.pos:self.pos + count]
            if len(digits) != count or any(c not in '0123456789abcdefABCDEF' for c in digits):
                raise RegexSyntaxError(f"incomplete escape \\{ch}{digits}", start)
            self._advance(count)
            return chr(int(digits, 16))
        if ch == 'N':
            self._expect('{')
            end = self.pattern.find('}', self.pos)
            if end < 0:
                raise RegexSyntaxError("missing }, unterminated name", self.pos)
            name = self.pattern[self.pos:end]
            self.pos = end + 1
            try:
                return unicodedata.lookup(name)
            except KeyError:
                raise RegexSyntaxError(f"undefined character name {name!r}", start)
        if ch in OCT_DIGITS:
            digits = ch
            while len(digits) < 3 and self._peek() is not None and self._peek() in OCT_DIGITS:
                digits += self._peek()
                self._advance()
            return chr(int(digits, 8))
        if ch.isascii() and ch.isalnum():
            raise RegexSyntaxError(f"bad escape \\{ch}", start)
        return ch

    def _parse_class(self) -> RegexNode:
        start = self.pos
        self._expect('[')
        negate = self._match('^')
        items: List[ClassItem] = []
        first = True

        while True:
            ch = self._peek()
            if ch is None:
                raise RegexSyntaxError("unterminated character set", start)
            if ch == ']' and not first:
                self._advance()
                break
            first = False

            lo = self._parse_class_atom()
            if isinstance(lo, str) and lo.startswith('\\') and len(lo) == 2 and lo[1] in CLASS_ESCAPES:
                items.append(lo)
                continue

            if self._peek() == '-' and self._peek(1) not in (']', None):
                self._advance()
                hi = self._parse_class_atom()
                if len(hi) != 1 or hi < lo:
                    raise RegexSyntaxError("bad character range", start)
                items.append((lo, hi))
            else:
                items.append((lo, lo))

        return RegexNode(RegexOp.CHAR_CLASS, items=items, negate=negate,
                         fold='i' in self.flags, ascii='a' in self.flags)

    def _parse_class_atom(self) -> str:
        start = self.pos
        ch = self._peek()
        self._advance()
        if ch != '\\':
            return ch

        ch = self._peek()
        if ch is None:
            raise RegexSyntaxError("bad escape (end of pattern)", start)
        if ch in CLASS_ESCAPES:
            self._advance()
            return '\\' + ch
        if ch == 'b':
            self._advance()
            return '\b'
        return self._parse_char_escape(start)


def _concat(terms: List[RegexNode]) -> RegexNode:
    """Build a concatenation, flattening nested runs and merging literals."""
    out: List[RegexNode] = []
    for term in terms:
        children = term.sub if term.op == RegexOp.CONCAT else [term]
        for child in children:
            if child.op == RegexOp.EMPTY_MATCH:
                continue
            prev = out[-1] if out else None
            if (prev is not None and prev.op == RegexOp.LITERAL
                    and child.op == RegexOp.LITERAL and prev.fold == child.fold
                    and prev.ascii == child.ascii):
                out[-1] = RegexNode(RegexOp.LITERAL, chars=prev.chars + child.chars,
                                    fold=prev.fold, ascii=prev.ascii)
            else:
                out.append(child)

    if not out:
        return RegexNode(RegexOp.EMPTY_MATCH)
    if len(out) == 1:
        return out[0]
    return RegexNode(RegexOp.CONCAT, sub=out)


def parse(pattern: str) -> RegexNode:
    """
    Parse a pattern into a syntax tree.

    Raises:
        RegexSyntaxError: if the pattern cannot be represented
    """
    return _Parser(pattern).parse()


# =============================================================================
# ECMASCRIPT RENDERING
# =============================================================================

def _escape_char(ch: str, meta: frozenset) -> str:
    if ch in meta:
        return '\\' + ch
    if ch in CONTROL_ESCAPES:
        return CONTROL_ESCAPES[ch]
    cp = ord(ch)
    if cp < 0x20 or cp == 0x7f:
        return '\\x%02X' % cp
    if not ch.isprintable() and cp <= 0xffff:
        return '\\u%04X' % cp
    return ch


def _case_variants(ch: str, ascii: bool = False) -> List[str]:
    if ascii and not ch.isascii():
        return [ch]
    variants = {ch}
    for other in (ch.lower(), ch.upper()):
        if len(other) == 1:
            variants.add(other)
    if not ascii:
        for variant in list(variants):
            variants.update(EXTRA_FOLDS.get(variant, ''))
    return sorted(variants)


def _fold_items(items: List[ClassItem], ascii: bool = False) -> List[ClassItem]:
    """Add the other-case counterparts of every character and ASCII range."""
    out: List[ClassItem] = []
    for item in items:
        out.append(item)
        if isinstance(item, str):
            continue
        lo, hi = item
        if lo == hi:
            out.extend((v, v) for v in _case_variants(lo, ascii) if v != lo)
        elif 'a' <= lo and hi <= 'z':
            out.append((lo.upper(), hi.upper()))
            if not ascii:
                out.extend(_non_ascii_folds(lo, hi))
        elif 'A' <= lo and hi <= 'Z':
            out.append((lo.lower(), hi.lower()))
            if not ascii:
                out.extend(_non_ascii_folds(lo, hi))
    return out


def _non_ascii_folds(lo: str, hi: str) -> List[ClassItem]:
    """Non-ASCII case partners of the letters in an ASCII range."""
    extra = set()
    for cp in range(ord(lo), ord(hi) + 1):
        extra.update(v for v in EXTRA_FOLDS.get(chr(cp), '') if not v.isascii())
    return [(v, v) for v in sorted(extra)]


def _write_class_items(out: List[str], items: List[ClassItem]) -> None:
    for item in items:
        if isinstance(item, str):
            out.append(item)
            continue
        lo, hi = item
        out.append(_escape_char(lo, CLASS_META_CHARS))
        if hi != lo:
            out.append('-')
            out.append(_escape_char(hi, CLASS_META_CHARS))


def _write_literal(out: List[str], node: RegexNode) -> None:
    for ch in node.chars:
        variants = _case_variants(ch, node.ascii) if node.fold else [ch]
        if len(variants) == 1:
            out.append(_escape_char(ch, META_CHARS))
        else:
            out.append('[')
            out.extend(_escape_char(v, CLASS_META_CHARS) for v in variants)
            out.append(']')


def _write_class(out: List[str], node: RegexNode) -> None:
    items = _fold_items(node.items, node.ascii) if node.fold else node.items
    if not node.negate and len(items) == 1 and isinstance(items[0], str):
        out.append(items[0])
        return
    out.append('[^' if node.negate else '[')
    _write_class_items(out, items)
    out.append(']')


def _write_leaf(out: List[str], node: RegexNode) -> None:
    """Render the nodes whose text is the same in both dialects."""
    if node.op == RegexOp.LITERAL:
        _write_literal(out, node)
    elif node.op == RegexOp.CHAR_CLASS:
        _write_class(out, node)
    elif node.op == RegexOp.WORD_BOUNDARY:
        out.append('\\b')
    elif node.op == RegexOp.NO_WORD_BOUNDARY:
        out.append('\\B')
    elif node.op == RegexOp.BACKREF:
        out.append('\\' + node.name if node.name.isdigit() else '\\k<%s>' % node.name)
    elif node.op == RegexOp.LOOKAROUND:
        out.append('(?' + node.look)
        _write(out, node.sub[0])
        out.append(')')
    # EMPTY_MATCH renders as nothing


def _needs_group(node: RegexNode) -> bool:
    return node.op > RegexOp.CAPTURE or (node.op == RegexOp.LITERAL and len(node.chars) > 1)


def _write(out: List[str], node: RegexNode) -> None:
    op = node.op
    if op == RegexOp.ANY_CHAR_NOT_NL:
        out.append('.')
    elif op == RegexOp.ANY_CHAR:
        out.append('[\\s\\S]')
    elif op in (RegexOp.BEGIN_LINE, RegexOp.BEGIN_TEXT):
        out.append('^')
    elif op in (RegexOp.END_LINE, RegexOp.END_TEXT):
        out.append('$')
    elif op == RegexOp.CAPTURE:
        out.append('(?<%s>' % node.name if node.name else '(')
        _write(out, node.sub[0])
        out.append(')')
    elif op in QUANTIFIER_OPS:
        sub = node.sub[0]
        if _needs_group(sub):
            out.append('(?:')
            _write(out, sub)
            out.append(')')
        else:
            _write(out, sub)

        if op == RegexOp.STAR:
            out.append('*')
        elif op == RegexOp.PLUS:
            out.append('+')
        elif op == RegexOp.QUEST:
            out.append('?')
        else:
            out.append('{%d' % node.min)
            if node.max != node.min:
                out.append(',')
                if node.max >= 0:
                    out.append('%d' % node.max)
            out.append('}')

        if node.lazy:
            out.append('?')
    elif op == RegexOp.CONCAT:
        for sub in node.sub:
            if sub.op == RegexOp.ALTERNATE:
                out.append('(?:')
                _write(out, sub)
                out.append(')')
            else:
                _write(out, sub)
    elif op == RegexOp.ALTERNATE:
        for i, sub in enumerate(node.sub):
            if i > 0:
                out.append('|')
            _write(out, sub)
    else:
        _write_leaf(out, node)


def to_ecmascript(node: RegexNode) -> str:
    """Render a syntax tree as an ECMAScript pattern."""
    out: List[str] = []
    _write(out, node)
    return ''.join(out)


def quote_meta(text: str) -> str:
    """
    Escape every regular expression metacharacter in `text`.

    The result matches `text` literally in both dialects.

    Examples:
        >>> quote_meta('1.5+x')
        '1\\\\.5\\\\+x'
    """
    return ''.join('\\' + ch if ch in META_CHARS else ch for ch in text)


# =============================================================================
# OPERATIONS
# =============================================================================

def make_regexp_compatible_with_ecmascript(ctx: Context, pattern: str) -> str:
    """
    Rewrite a source-dialect pattern into an equivalent ECMAScript pattern.

    Args:
        ctx: Translation context
        pattern: Pattern text in the source dialect

    Returns:
        The pattern text in the target dialect.

    Raises:
        GenerationError: if the pattern is not a valid source pattern
    """
    ctx.debug("make_regexp_compatible_with_ecmascript")
    try:
        re.compile(pattern)
        tree = parse(pattern)
    except (re.error, RegexSyntaxError) as e:
        ctx.fail("failed to parse regular expression %r: %s", pattern, e)
    return to_ecmascript(tree)


def matches_empty_string(ctx: Context, pattern: str) -> bool:
    """Report whether the source engine finds a match in the empty string."""
    ctx.debug("matches_empty_string")
    try:
        return re.search(pattern, '') is not None
    except re.error as e:
        ctx.fail("failed to check if pattern matches empty string %r: %s", pattern, e)
