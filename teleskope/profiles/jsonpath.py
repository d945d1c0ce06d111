"""JSONPath extraction over untyped Kubernetes objects.

Supported subset (enough for every profile column in use):

    $.metadata.name                      dotted members
    $.metadata.labels['kubernetes.io/role']  bracketed members
    $.spec.ports[0] / [-1]               indices
    $.spec.ports[*].port / $.data.*      wildcards over sequences and mappings
    $.status.conditions[?(@.type=='Ready')].status   filter predicates
    $.status.active.length               length of a sequence or string

Results are "unwrapped": no match gives None, a definite path gives its
single value, and a path with a wildcard or filter gives the single match
when there is exactly one, otherwise the list of matches.

``extract`` never raises.  Unparseable paths are logged at debug and
behave like a path that matched nothing.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from teleskope.observability.logging import get_logger

_logger = get_logger("profiles.jsonpath")

_NAME_RE = re.compile(r"[A-Za-z_$][\w$-]*")
_INDEX_RE = re.compile(r"-?\d+")
_NUMBER_RE = re.compile(r"-?\d+(\.\d+)?")
_FILTER_RE = re.compile(
    r"""^@(?P<path>(?:\.[\w$-]+|\[(?:'[^']*'|"[^"]*"|-?\d+)\])*)"""
    r"""\s*(?:(?P<op>===|!==|==|!=)\s*(?P<literal>.+?))?\s*$"""
)
_NO_LITERAL = object()


class PathSyntaxError(ValueError):
    """Raised by ``parse_path`` for expressions outside the supported subset."""


@dataclass(frozen=True)
class _Member:
    name: str


@dataclass(frozen=True)
class _Index:
    index: int


@dataclass(frozen=True)
class _Wildcard:
    pass


@dataclass(frozen=True)
class _Filter:
    path: tuple[Any, ...]
    op: str | None
    literal: Any


def extract(document: Any, path: str) -> Any:
    """Evaluate ``path`` against ``document``; None when nothing matches."""
    if not isinstance(path, str):
        return None
    try:
        steps = parse_path(path)
    except PathSyntaxError as exc:
        _logger.debug("jsonpath_invalid", path=path, error=str(exc))
        return None

    matches = [document]
    for step in steps:
        matches = _apply(step, matches)
        if not matches:
            return None

    if len(matches) == 1 or not _is_indefinite(steps):
        return matches[0]
    return matches


@functools.lru_cache(maxsize=512)
def parse_path(path: str) -> tuple[Any, ...]:
    """Compile a path expression into a tuple of steps."""
    text = path.strip()
    if not text:
        raise PathSyntaxError("empty path")
    if text.startswith("$"):
        text = text[1:]
    elif text and text[0] not in ".[":
        # Relative form: "metadata.name"
        text = "." + text

    steps: list[Any] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch == ".":
            if text.startswith("..", pos):
                raise PathSyntaxError("recursive descent is not supported")
            if text.startswith(".*", pos):
                steps.append(_Wildcard())
                pos += 2
                continue
            m = _NAME_RE.match(text, pos + 1)
            if m is None:
                raise PathSyntaxError(f"expected member name at offset {pos + 1}")
            steps.append(_Member(m.group()))
            pos = m.end()
        elif ch == "[":
            step, pos = _parse_bracket(text, pos)
            steps.append(step)
        else:
            raise PathSyntaxError(f"unexpected {ch!r} at offset {pos}")
    return tuple(steps)


def _parse_bracket(text: str, pos: int) -> tuple[Any, int]:
    if text.startswith("[*]", pos):
        return _Wildcard(), pos + 3

    if text.startswith("[?(", pos):
        end = _filter_end(text, pos + 3)
        return _parse_filter(text[pos + 3 : end]), end + 2

    if pos + 1 < len(text) and text[pos + 1] in "'\"":
        quote = text[pos + 1]
        close = text.find(quote + "]", pos + 2)
        if close < 0:
            raise PathSyntaxError(f"unterminated quoted member at offset {pos}")
        return _Member(text[pos + 2 : close]), close + 2

    close = text.find("]", pos)
    if close < 0:
        raise PathSyntaxError(f"unterminated bracket at offset {pos}")
    inner = text[pos + 1 : close].strip()
    if not _INDEX_RE.fullmatch(inner):
        raise PathSyntaxError(f"unsupported bracket expression {inner!r}")
    try:
        index = int(inner)
    except ValueError as exc:
        raise PathSyntaxError(f"index out of range {inner[:20]!r}...") from exc
    return _Index(index), close + 1


def _filter_end(text: str, start: int) -> int:
    """Return the offset of the ``)`` closing a ``[?(`` predicate."""
    quote: str | None = None
    depth = 1
    for i in range(start, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "'\"":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                if not text.startswith(")]", i):
                    break
                return i
    raise PathSyntaxError("unterminated filter expression")


def _parse_filter(expr: str) -> _Filter:
    m = _FILTER_RE.match(expr.strip())
    if m is None:
        raise PathSyntaxError(f"unsupported filter {expr!r}")
    sub_path = parse_path("$" + m.group("path"))
    op = m.group("op")
    if op is None:
        return _Filter(path=sub_path, op=None, literal=_NO_LITERAL)
    op = {"===": "==", "!==": "!="}.get(op, op)
    return _Filter(path=sub_path, op=op, literal=_parse_literal(m.group("literal")))


def _parse_literal(text: str) -> Any:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    if text in ("true", "false"):
        return text == "true"
    if text == "null":
        return None
    if _NUMBER_RE.fullmatch(text):
        try:
            return float(text) if "." in text else int(text)
        except ValueError as exc:
            raise PathSyntaxError(f"numeric literal out of range {text[:20]!r}...") from exc
    raise PathSyntaxError(f"unsupported literal {text!r}")


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def _is_indefinite(steps: tuple[Any, ...]) -> bool:
    return any(isinstance(s, (_Wildcard, _Filter)) for s in steps)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _children(value: Any) -> list[Any]:
    if isinstance(value, Mapping):
        return list(value.values())
    if _is_sequence(value):
        return list(value)
    return []


def _apply(step: Any, values: list[Any]) -> list[Any]:
    out: list[Any] = []
    for value in values:
        if isinstance(step, _Member):
            if isinstance(value, Mapping):
                if step.name in value:
                    out.append(value[step.name])
            elif step.name == "length" and (_is_sequence(value) or isinstance(value, str)):
                out.append(len(value))
        elif isinstance(step, _Index):
            if _is_sequence(value) and -len(value) <= step.index < len(value):
                out.append(value[step.index])
        elif isinstance(step, _Wildcard):
            out.extend(_children(value))
        else:
            out.extend(child for child in _children(value) if _test(step, child))
    return out


def _test(predicate: _Filter, candidate: Any) -> bool:
    found = [candidate]
    for step in predicate.path:
        found = _apply(step, found)
        if not found:
            break

    if predicate.op is None:
        return bool(found) and bool(found[0])
    equal = bool(found) and _equals(found[0], predicate.literal)
    return equal if predicate.op == "==" else not equal


def _equals(left: Any, right: Any) -> bool:
    # True == 1 in Python; keep booleans distinct from numbers.
    if isinstance(left, bool) or isinstance(right, bool):
        return left is right
    return bool(left == right)
