"""Terminal report for a form snapshot, rendered with kida."""

from dataclasses import dataclass

from kida import Environment

from regform.status import Failed, Pending, Succeeded
from regform.store import FormSnapshot

_REPORT_TEMPLATE = """\
{% for line in errors %}
  x {{ line.field }}: {{ line.message }}
{% end %}
{% if banner %}
{{ banner }}
{% end %}
{% if summary %}
{{ summary }}
{% end %}
"""

_env = Environment(autoescape=False, trim_blocks=True, lstrip_blocks=True)


@dataclass(frozen=True, slots=True)
class _ErrorLine:
    field: str
    message: str


def _banner(snapshot: FormSnapshot) -> str:
    match snapshot.status:
        case Succeeded(message=message):
            return message
        case Failed(reason=reason):
            return f"Error: {reason}"
        case Pending():
            return "Sending..."
        case _:
            return ""


def _summary(snapshot: FormSnapshot) -> str:
    # The form is reset after a success
    if isinstance(snapshot.status, Succeeded):
        return ""
    return "Form is valid." if snapshot.is_valid else "Form is not valid."


def render_report(snapshot: FormSnapshot, *, show_all: bool = False) -> str:
    """Render the errors a user would see, the status banner, and validity."""
    errors = snapshot.errors if show_all else snapshot.visible_errors
    lines = [_ErrorLine(field, message) for field, message in errors.items()]
    template = _env.from_string(_REPORT_TEMPLATE)
    rendered = template.render({
        "errors": lines,
        "banner": _banner(snapshot),
        "summary": _summary(snapshot),
    })
    return "\n".join(line for line in rendered.splitlines() if line.strip())
