#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Rule and RuleSet: the dispatch table of the converter.

A rule pairs a filter (which nodes it applies to) with a replacement
function (how a node becomes text). Rules are looked up per node in
priority order and the first match wins. Later-registered rules take
priority over earlier ones, so custom rules layered over the defaults
override them for the nodes their filters accept.

Rules are plain data. Anything a rule needs to remember during a
conversion lives in the per-call ``ConversionContext``, created from the
rule's ``accumulator`` factory, never on the rule itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Sequence, Union

from govspeak_paste.node import Node
from govspeak_paste.options import GovspeakOptions

if TYPE_CHECKING:
    from govspeak_paste.converter import ConversionContext

RuleFilter = Union[str, Sequence[str], Callable[[Node, GovspeakOptions], Any]]
Replacement = Callable[[str, Node, "ConversionContext"], str]
Append = Callable[["ConversionContext"], str]


@dataclass(frozen=True)
class Rule:
    """A named (filter, replacement) pair.

    Parameters
    ----------
    name : str
        Unique name, used to replace or remove the rule and to key its
        per-call state.
    filter : str, sequence of str, or callable
        A tag name, a collection of tag names, or a predicate called with
        ``(node, options)``.
    replacement : callable
        Called with ``(content, node, context)`` where ``content`` is the
        already-converted text of the node's children.
    accumulator : callable, optional
        Factory for mutable state scoped to one conversion call. The state is
        reachable through ``context.state(rule.name)``.
    append : callable, optional
        Called with the context once traversal has finished; its output is
        joined to the end of the document.

    """

    name: str
    filter: RuleFilter
    replacement: Replacement
    accumulator: Callable[[], Any] | None = None
    append: Append | None = None

    def matches(self, node: Node, options: GovspeakOptions) -> bool:
        """Return whether this rule applies to ``node``."""
        if isinstance(self.filter, str):
            return node.name == self.filter.lower()
        if callable(self.filter):
            return bool(self.filter(node, options))
        return node.name in {tag.lower() for tag in self.filter}


class RuleSet:
    """Ordered, immutable collection of rules.

    Parameters
    ----------
    rules : iterable of Rule
        Rules in registration order. The last registered rule has the
        highest priority.
    default_rule : Rule
        Used when no rule matches.
    blank_rule : Rule
        Used for blank nodes, before any other rule is considered.

    """

    def __init__(self, rules: Iterable[Rule], default_rule: Rule, blank_rule: Rule):
        # Stored highest priority first
        self._rules: tuple[Rule, ...] = tuple(reversed(tuple(rules)))
        self.default_rule = default_rule
        self.blank_rule = blank_rule

    def __iter__(self) -> Iterator[Rule]:
        """Iterate rules in priority order."""
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return any(rule.name == name for rule in self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({[rule.name for rule in self._rules]!r})"

    def get(self, name: str) -> Rule | None:
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    @property
    def registration_order(self) -> tuple[Rule, ...]:
        return tuple(reversed(self._rules))

    def add_rule(self, rule: Rule) -> RuleSet:
        """Return a new RuleSet with ``rule`` registered at the highest priority.

        A rule already registered under the same name is dropped, so
        re-registering a name replaces its behavior.
        """
        kept = [existing for existing in self.registration_order if existing.name != rule.name]
        return RuleSet([*kept, rule], self.default_rule, self.blank_rule)

    def remove_rule(self, name: str) -> RuleSet:
        """Return a new RuleSet without the rule called ``name``."""
        kept = [existing for existing in self.registration_order if existing.name != name]
        return RuleSet(kept, self.default_rule, self.blank_rule)

    def with_blank_rule(self, rule: Rule) -> RuleSet:
        return RuleSet(self.registration_order, self.default_rule, rule)

    def with_default_rule(self, rule: Rule) -> RuleSet:
        return RuleSet(self.registration_order, rule, self.blank_rule)

    def for_node(self, node: Node, options: GovspeakOptions) -> Rule:
        """Select the rule for ``node``.

        Blank nodes always get the blank rule. Otherwise the highest priority
        matching rule wins, falling back to the default rule.
        """
        if node.is_blank:
            return self.blank_rule
        for rule in self._rules:
            if rule.matches(node, options):
                return rule
        return self.default_rule

    @property
    def stateful_rules(self) -> tuple[Rule, ...]:
        """Rules that keep per-call state or append to the document."""
        return tuple(rule for rule in self._rules if rule.accumulator is not None or rule.append is not None)
