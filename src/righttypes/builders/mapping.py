"""Map schemas: required and optional keys, each with its own test.

Missing required keys are reported first and short-circuit the value checks.
Keys the specification doesn't mention are checked with the unknown-key rule
chosen at build time: pass them through (the default) or report each one.
A side-effect of the default is that a misspelled optional key looks like an
unknown key and passes silently.
"""

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any

from righttypes.builders.base import (
    CheckResult,
    Failure,
    Schema,
    aggregate,
    render_test,
    whole_value_error,
)
from righttypes.builders.leaf import Test, check_leaf
from righttypes.config import KeyPolicy
from righttypes.errors import FieldError, ValidationError
from righttypes.exceptions import SchemaSpecError
from righttypes.result import Err


@dataclass(frozen=True)
class Opt:
    """Marks a map specification key as optional: ``{Opt("middle"): str}``."""

    key: Hashable


@dataclass(frozen=True)
class KeyRule:
    """The test for one key plus its rendering for error messages."""

    test: Test
    rendered: str


def _any_value(_: Any) -> bool:
    return True


def _no_value(_: Any) -> bool:
    return False


UNKNOWN_KEY_RULES: dict[KeyPolicy, KeyRule] = {
    KeyPolicy.ALLOW: KeyRule(_any_value, "(lambda _: True)"),
    KeyPolicy.DISALLOW: KeyRule(_no_value, "unexpected_map_key"),
}


class MapSchema(Schema):
    """Checks a mapping against ``{key: test}`` / ``{Opt(key): test}`` entries."""

    def __init__(
        self,
        spec: Mapping[Hashable, Test],
        unknown_keys: KeyPolicy = KeyPolicy.ALLOW,
        name: str | None = None,
    ) -> None:
        required: list[Hashable] = []
        rules: dict[Hashable, KeyRule] = {}
        for spec_key, test in spec.items():
            key = spec_key.key if isinstance(spec_key, Opt) else spec_key
            if key in rules:
                raise SchemaSpecError(spec, f"Key {key!r} declared both required and optional")
            if not isinstance(spec_key, Opt):
                required.append(key)
            rules[key] = KeyRule(test, f"{spec_key!r} {render_test(test)}")

        self.required_keys = tuple(required)
        self.rules = rules
        self.unknown_key_rule = UNKNOWN_KEY_RULES[KeyPolicy(unknown_keys)]
        super().__init__(name or "{" + ", ".join(r.rendered for r in rules.values()) + "}")

    def check(self, value: Any) -> CheckResult:
        if not isinstance(value, Mapping):
            return whole_value_error(value, f"(mapping? {value!r})")

        missing = [key for key in self.required_keys if key not in value]
        if missing:
            rendered = [self.rules[key].rendered for key in missing]
            return Err(
                ValidationError(
                    subject=value,
                    errors=tuple(FieldError(key, r) for key, r in zip(missing, rendered)),
                    message="Missing k/v(s): " + ", ".join(rendered),
                )
            )

        errors: list[Failure] = []
        for key, item in value.items():
            rule = self.rules.get(key, self.unknown_key_rule)
            errors.extend(check_leaf(rule.test, rule.rendered, item, key))
        return aggregate(value, errors)
