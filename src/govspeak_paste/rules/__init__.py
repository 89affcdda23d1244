#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Conversion rules and the default Govspeak rule set."""

from govspeak_paste.rules import commonmark, govspeak
from govspeak_paste.rules.base import Rule, RuleSet


def build_rule_set() -> RuleSet:
    """Build the CommonMark defaults with the Govspeak rules registered on top."""
    rule_set = RuleSet(commonmark.commonmark_rules(), commonmark.DEFAULT_RULE, govspeak.BLANK_RULE)
    for rule in govspeak.govspeak_rules():
        rule_set = rule_set.add_rule(rule)
    return rule_set


__all__ = ["Rule", "RuleSet", "build_rule_set"]
