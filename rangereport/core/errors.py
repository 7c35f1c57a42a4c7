class ReportError(Exception):
    pass


class ValidationError(ReportError):
    pass


class SnapshotError(ReportError):
    pass


class UnknownChoiceError(ValidationError):
    def __init__(self, kind: str, value: str, choices: tuple[str, ...] = ()):
        self.kind = kind
        self.value = value
        self.choices = choices
        note = f" (expected one of: {', '.join(choices)})" if choices else ""
        super().__init__(f"unknown {kind} '{value}'{note}")
