"""String rewriting for Lindenmayer systems."""

from __future__ import annotations

from collections.abc import Generator, Mapping


def expand(axiom: str, rules: Mapping[str, str], level: int) -> str:
    """Rewrite ``axiom`` ``level`` times and return the resulting sequence.

    Symbols with no rule are copied through unchanged.
    """
    if level < 0:
        raise ValueError("level must be >= 0")
    buf: list[str] = []
    _expand_into(axiom, rules, level, buf)
    return "".join(buf)


def _expand_into(
    seq: str, rules: Mapping[str, str], level: int, buf: list[str]
) -> None:
    if level == 0:
        buf.append(seq)
        return

    for sym in seq:
        replacement = rules.get(sym)
        if replacement is None:
            buf.append(sym)
        else:
            _expand_into(replacement, rules, level - 1, buf)


def stream_expand(
    axiom: str, rules: Mapping[str, str], level: int
) -> Generator[str, None, None]:
    """Yield the symbols of ``expand(axiom, rules, level)`` one at a time.

    Uses an explicit stack of (string, index, depth) frames, so deep systems
    can be measured without building the full sequence.
    """
    if level < 0:
        raise ValueError("level must be >= 0")

    stack: list[tuple[str, int, int]] = [(axiom, 0, 0)]

    while stack:
        s, i, d = stack.pop()
        if i >= len(s):
            continue

        ch = s[i]
        stack.append((s, i + 1, d))

        if d < level and ch in rules:
            # The replacement sits above the continuation, so it is fully
            # traversed before the rest of the current string.
            stack.append((rules[ch], 0, d + 1))
        else:
            yield ch
