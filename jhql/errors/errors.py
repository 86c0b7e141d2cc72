class JhqlError(Exception): ...


class DecodeError(JhqlError): ...


class ConfigurationError(JhqlError): ...


class GrammarError(JhqlError): ...


class IllegalExpressionError(GrammarError):
    def __init__(self, expr: object):
        self.expr = expr
        super().__init__(f"illegal query expression: {expr!r}")


class IllegalStringExpressionError(GrammarError):
    def __init__(self, expr: str):
        self.expr = expr
        super().__init__(f"illegal string expression: {expr!r}")


class MissingTypeError(GrammarError):
    def __init__(self):
        super().__init__("missing _type: complexed queryers must contain a '_type' field")


class TypeFieldError(GrammarError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"'_type' must be a string, got {value!r}")


class UnsupportedTypeError(GrammarError):
    def __init__(self, queryer_type: str):
        self.queryer_type = queryer_type
        super().__init__(f"unsupported queryer type: `{queryer_type}`")


class InstantiationError(GrammarError):
    def __init__(self, queryer_type: str):
        self.queryer_type = queryer_type
        super().__init__(f"cannot instantiate queryer `{queryer_type}`")


class RequiredPropertyError(GrammarError):
    def __init__(self, prop: str, queryer_type: str):
        self.prop = prop
        self.queryer_type = queryer_type
        super().__init__(f"property `{prop}` is required for type `{queryer_type}`")


class PropertyTypeError(GrammarError):
    def __init__(self, prop: str, queryer_type: str, expected: str):
        self.prop = prop
        self.queryer_type = queryer_type
        self.expected = expected
        super().__init__(f"cannot set property `{prop}` on type `{queryer_type}`: expected {expected}")


class UnexpectedPropertyError(GrammarError):
    def __init__(self, props: list[str], queryer_type: str):
        self.props = props
        self.queryer_type = queryer_type
        super().__init__(f"unexpected property `{','.join(props)}` on type `{queryer_type}`")


class NestingTooDeepError(GrammarError):
    def __init__(self):
        super().__init__("query expression nested too deeply")
