"""
Form helpers shared by the API blueprints.

Forms read form-encoded or JSON bodies (Flask-WTF wraps JSON for us). The API
is token-free, so the per-form CSRF field is switched off here; the browser
facing app keeps CSRFProtect for everything else.
"""
from typing import Any, Dict

from flask import request
from flask_wtf import FlaskForm

from utils.errors import ValidationError


class ApiForm(FlaskForm):
    class Meta:
        csrf = False

    def submitted(self) -> set:
        if request.is_json:
            body = request.get_json(silent=True) or {}
            return set(body) if isinstance(body, dict) else set()
        return set(request.form.keys())

    def values(self, partial: bool = False) -> Dict[str, Any]:
        """
        Field data as keyword arguments for a service call.

        ``partial`` keeps only the fields present in the request body (PUT);
        otherwise fields left empty are dropped so column defaults apply.
        """
        sent = self.submitted()
        out = {}
        for name, field in self._fields.items():
            if partial:
                if name in sent:
                    out[name] = field.data
            elif field.data is not None and field.data != '':
                out[name] = field.data
        return out


def validated(form_cls, **kwargs) -> ApiForm:
    """Instantiate and validate a form, raising ``ValidationError`` with field errors."""
    form = form_cls(**kwargs)
    if not form.validate():
        raise ValidationError('Invalid input', fields=form.errors)
    return form
