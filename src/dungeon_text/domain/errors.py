from __future__ import annotations


class TextContentError(ValueError):
    pass


class ConditionFormatError(TextContentError):
    def __init__(self, field_name: str, raw_text: str, reason: str, *, line_id: str | None = None) -> None:
        self.field_name = field_name
        self.raw_text = raw_text
        self.reason = reason
        self.line_id = line_id
        owner = f"TextLine '{line_id}' " if line_id else ""
        super().__init__(f"{owner}{field_name}: {reason}: {raw_text!r}")


class ConditionCacheNotReadyError(RuntimeError):
    pass
