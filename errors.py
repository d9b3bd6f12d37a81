"""Domain errors raised by the workflow engine.

Each carries a machine-readable ``kind`` plus enough detail for the API
layer to render a precise message. Anything that is not an ``I9Error`` is
an internal failure and is rendered generically.
"""


class I9Error(Exception):
    kind = "error"
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.kind, "detail": self.detail}


class NotFound(I9Error):
    kind = "not_found"
    status_code = 404


class InvalidField(I9Error):
    kind = "invalid_field"
    status_code = 400

    def __init__(self, field_name: str):
        super().__init__(f"Invalid field name: {field_name}")
        self.field_name = field_name


class ValidationFailed(I9Error):
    """Carries every problem found, not just the first one."""

    kind = "validation_failed"
    status_code = 422

    def __init__(self, errors: list[dict], detail: str = "Validation failed"):
        super().__init__(detail)
        self.errors = errors

    @property
    def messages(self) -> list[str]:
        return [e["message"] for e in self.errors]

    def to_dict(self) -> dict:
        return {**super().to_dict(), "errors": self.errors}


class InvalidTransition(I9Error):
    kind = "invalid_transition"
    status_code = 409

    def __init__(self, current: str, required: list[str], action: str):
        super().__init__(
            f"Cannot {action}: form status is '{current}', "
            f"requires {' or '.join(repr(s) for s in required)}"
        )
        self.current = current
        self.required = required
        self.action = action

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "current_status": self.current,
            "required_status": self.required,
        }


class AlreadySubmitted(I9Error):
    kind = "already_submitted"
    status_code = 409

    def __init__(self, form_id: str, status: str):
        super().__init__(
            f"I-9 form already submitted (status '{status}'); it can no longer be overwritten"
        )
        self.form_id = form_id
        self.status = status

    def to_dict(self) -> dict:
        return {**super().to_dict(), "form_id": self.form_id, "status": self.status}
