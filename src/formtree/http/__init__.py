"""Transport adapter: form bodies to raw input."""

from formtree.http.forms import FormData, parse_form_data, raw_input

__all__ = ["FormData", "parse_form_data", "raw_input"]
