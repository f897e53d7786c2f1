"""Exceptions raised by the formrules validation engine."""


class FormRulesError(Exception):
    """Base class for all formrules errors."""


class ConfigurationError(FormRulesError):
    """Raised when rules or form definitions cannot be assembled.

    Configuration problems are detected while the engine is being built
    and abort setup; an engine is never returned in a half-configured state.
    """


class UnknownRuleError(FormRulesError):
    """Raised when a specifier references a rule the registry does not know.

    Attributes:
        rule_name: The rule name that failed lookup
        field_name: The field being validated, or None outside a field context
    """

    def __init__(self, rule_name: str, field_name: str | None = None):
        self.rule_name = rule_name
        self.field_name = field_name
        if field_name is None:
            message = f"Rule '{rule_name}' is not registered."
        else:
            message = f"Rule '{rule_name}' assigned to field '{field_name}' is not registered."
        super().__init__(message)
