"""Rule Engine for forbidden import rules.

The engine:
1. Evaluates the dynamic ``forbidden_imports`` rules from ``architect.json``
2. Evaluates the fixed rules that are always active
3. Produces one violation per (import, matching rule) pair

Matching is plain substring containment on lower-cased text. Rule patterns
are normalized when the config is loaded; only the file path and module
paths are normalized here.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from architect_linter.audit.imports import ImportReference
from architect_linter.models.config import ForbiddenRule, LinterConfig, normalize_pattern
from architect_linter.models.violation import Violation, ViolationKind

logger = structlog.get_logger()


@dataclass(frozen=True)
class FixedRule:
    """A forbidden import rule that cannot be configured away."""

    rule_id: str
    from_: str
    to: str
    message: str


CONTROLLER_REPOSITORY_RULE = FixedRule(
    rule_id="mvc-controller-repository",
    from_="controller",
    to=".repository",
    message="MVC: controllers must not import repositories directly.",
)

DEFAULT_FIXED_RULES: tuple[FixedRule, ...] = (CONTROLLER_REPOSITORY_RULE,)


def dynamic_rule_id(index: int) -> str:
    return f"forbidden-import:{index}"


class RuleEngine:
    """Evaluates forbidden import rules against one file's imports.

    The engine holds no per-file state and can be shared between worker
    threads.
    """

    def __init__(self, fixed_rules: Sequence[FixedRule] = DEFAULT_FIXED_RULES):
        self.fixed_rules = tuple(fixed_rules)
        self._logger = logger.bind(component="RuleEngine")

    def evaluate_file(
        self,
        file_path: str,
        imports: Sequence[ImportReference],
        config: LinterConfig,
    ) -> list[Violation]:
        """Evaluate all rules for a file.

        Args:
            file_path: Path of the analyzed file, as reported
            imports: The file's imports in source order
            config: Loaded rule configuration

        Returns:
            Violations ordered by import position, then rule declaration
            order (fixed rules last)
        """
        normalized_path = normalize_pattern(file_path)

        dynamic_rules = [
            (index, rule)
            for index, rule in enumerate(config.forbidden_imports)
            if rule.from_ in normalized_path
        ]
        fixed_rules = [rule for rule in self.fixed_rules if rule.from_ in normalized_path]

        if not dynamic_rules and not fixed_rules:
            return []

        violations: list[Violation] = []
        for reference in imports:
            module_path = normalize_pattern(reference.module_path)

            for index, rule in dynamic_rules:
                if rule.to in module_path:
                    violations.append(self._dynamic_violation(file_path, reference, index, rule))

            for fixed in fixed_rules:
                if fixed.to in module_path:
                    violations.append(Violation(
                        kind=ViolationKind.FORBIDDEN_IMPORT,
                        file_path=file_path,
                        line=reference.line,
                        column=reference.column,
                        message=f"Forbidden import '{reference.module_path}': {fixed.message}",
                        rule_id=fixed.rule_id,
                    ))

        if violations:
            self._logger.debug(
                "Forbidden imports found",
                file=file_path,
                violations=len(violations),
            )

        return violations

    def _dynamic_violation(
        self,
        file_path: str,
        reference: ImportReference,
        index: int,
        rule: ForbiddenRule,
    ) -> Violation:
        if rule.reason:
            message = f"Forbidden import '{reference.module_path}': {rule.reason}"
        else:
            message = (
                f"Forbidden import '{reference.module_path}': files in "
                f"'{rule.from_}' must not import from '{rule.to}'."
            )

        return Violation(
            kind=ViolationKind.FORBIDDEN_IMPORT,
            file_path=file_path,
            line=reference.line,
            column=reference.column,
            message=message,
            reason=rule.reason,
            rule_id=dynamic_rule_id(index),
        )
