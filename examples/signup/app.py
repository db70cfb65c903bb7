"""Signup — a nested registration form with cross-field validation.

Demonstrates:
- ``record`` to bind a sub-form straight into a dataclass
- ``validate`` with ``rule(...)`` on individual fields
- a ``validate`` over a whole sub-form (password confirmation), whose
  error lands on the sub-form's own path
- ``parse_form_data`` + ``raw_input`` at the transport boundary
- re-rendering a ``View`` through kida with per-field errors

Users are stored in memory; this is a demo, not production auth.
"""

from dataclasses import dataclass

from formtree import (
    Failure,
    Success,
    bind_view,
    boolean,
    email,
    get_view,
    label,
    matches,
    max_length,
    min_length,
    product,
    record,
    required,
    rule,
    text,
    validate,
)
from formtree.http import parse_form_data, raw_input
from formtree.templating import create_environment, render_view

# ---------------------------------------------------------------------------
# Form definition
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Account:
    username: str
    email: str


@dataclass(frozen=True, slots=True)
class Signup:
    account: Account
    password: str
    newsletter: bool


_username = matches(r"^[a-zA-Z0-9_]+$", message="Only letters, numbers, and underscores allowed")


def _passwords_match(pair: tuple[str, str]):
    password, confirm = pair
    if password != confirm:
        return Failure("Passwords do not match")
    return Success(password)


account_form = record(
    Account,
    username=validate(rule(required, min_length(3), max_length(20), _username), text()),
    email=validate(rule(required, email), text()),
)

password_form = validate(
    _passwords_match,
    product(
        label("password", validate(rule(required, min_length(8)), text())),
        label("confirm", text()),
        lambda password, confirm: (password, confirm),
    ),
)

signup_form = product(
    product(label("account", account_form), label("passwords", password_form), lambda a, p: (a, p)),
    label("newsletter", boolean()),
    lambda head, newsletter: Signup(head[0], head[1], newsletter),
)

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

PAGE = """\
<form method="post">
{% for e in form | descendant_errors("passwords") %}<p class="summary">{{ e.message }}</p>{% end %}
<input name="{{ form | input_name("account.username") }}" value="{{ form | field_value("account.username") }}" class="{{ form | error_class("account.username") }}">
{% for msg in form | field_errors("account.username") %}<span class="error">{{ msg }}</span>{% end %}
<input name="{{ form | input_name("account.email") }}" value="{{ form | field_value("account.email") }}">
{% for msg in form | field_errors("account.email") %}<span class="error">{{ msg }}</span>{% end %}
<input type="password" name="{{ form | input_name("passwords.password") }}">
<input type="password" name="{{ form | input_name("passwords.confirm") }}">
<input type="checkbox" name="{{ form | input_name("newsletter") }}"{{ form | checked("newsletter") }}>
</form>
"""

env = create_environment()

# ---------------------------------------------------------------------------
# In-memory "database"
# ---------------------------------------------------------------------------

users: list[Signup] = []


def show() -> str:
    """First display of the empty form."""
    return render_view(env, PAGE, get_view(signup_form))


async def submit(body: bytes, content_type: str) -> tuple[int, str]:
    """Handle a submission: 201 on success, 422 with the re-rendered form otherwise."""
    form = await parse_form_data(body, content_type)
    view, signup = bind_view(signup_form, raw_input(form))
    if signup is None:
        return 422, render_view(env, PAGE, view)
    users.append(signup)
    return 201, f"Welcome, {signup.account.username}!"
