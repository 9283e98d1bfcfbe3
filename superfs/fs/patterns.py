# superfs/fs/patterns.py

"""
Pattern matching for read filters and ignore lists
"""
import fnmatch
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Pattern, Union

logger = logging.getLogger(__name__)

PatternSpec = Union[str, Pattern, Callable[[str], bool], 'Matcher', Iterable[Any], None]

_REGEX_CHARS = {'^', '$', '(', ')', '{', '}', '|', '+', '\\'}


def is_regex_pattern(pattern: str) -> bool:
    """
    Check if pattern looks like a regex rather than a glob

    Glob syntax ('*', '?', '[...]') is shared, so only characters with no
    glob meaning count.
    """
    return any(char in pattern for char in _REGEX_CHARS)


@dataclass
class PatternRule:
    """Single compiled pattern"""
    pattern: str
    is_regex: bool = False
    case_sensitive: bool = True

    def __post_init__(self):
        flags = 0 if self.case_sensitive else re.IGNORECASE
        if self.is_regex:
            try:
                self.compiled_pattern = re.compile(self.pattern, flags)
                return
            except re.error as e:
                logger.error(f"Invalid regex pattern '{self.pattern}': {e}")
                self.is_regex = False
        self.compiled_pattern = re.compile(fnmatch.translate(self.pattern), flags)

    def matches(self, value: str) -> bool:
        """
        Check if value matches pattern

        Regex rules search anywhere in the value; glob rules must match the
        whole value ('*' also crosses '/').
        """
        if self.is_regex:
            return self.compiled_pattern.search(value) is not None
        return self.compiled_pattern.match(value) is not None


@dataclass
class Matcher:
    """
    Compiled predicate over path strings

    Matches when any rule or predicate matches.
    """
    rules: List[PatternRule] = field(default_factory=list)
    predicates: List[Callable[[str], bool]] = field(default_factory=list)

    def test(self, value: Any) -> bool:
        """Check if value (str or Path) matches"""
        text = str(value)
        for rule in self.rules:
            if rule.matches(text):
                return True
        for predicate in self.predicates:
            if predicate(text):
                return True
        return False

    __call__ = test

    @property
    def patterns(self) -> List[str]:
        return [rule.pattern for rule in self.rules]


def _add_spec(matcher: Matcher, spec: Any, case_sensitive: bool):
    if isinstance(spec, Matcher):
        matcher.rules.extend(spec.rules)
        matcher.predicates.extend(spec.predicates)
    elif isinstance(spec, str):
        matcher.rules.append(PatternRule(
            pattern=spec,
            is_regex=is_regex_pattern(spec),
            case_sensitive=case_sensitive,
        ))
    elif isinstance(spec, re.Pattern):
        matcher.predicates.append(lambda value, compiled=spec: compiled.search(value) is not None)
    elif callable(spec):
        matcher.predicates.append(spec)
    elif isinstance(spec, Iterable):
        for item in spec:
            _add_spec(matcher, item, case_sensitive)
    else:
        raise TypeError(f"Unsupported pattern specification: {spec!r}")


def create_matcher(spec: PatternSpec, case_sensitive: bool = True) -> Optional[Matcher]:
    """
    Compile a filter/ignore specification into a Matcher

    Args:
        spec: Glob or regex string, compiled regex, predicate callable,
            Matcher, or any iterable of those
        case_sensitive: Case sensitivity for string patterns

    Returns:
        Matcher, or None when spec is None or an empty collection
    """
    if spec is None:
        return None

    matcher = Matcher()
    _add_spec(matcher, spec, case_sensitive)

    if not matcher.rules and not matcher.predicates:
        return None
    return matcher
