"""Builders for small JavaScript snippets used by served pages."""

from __future__ import annotations

from collections.abc import Iterable

from utilkit.mapping import Key
from utilkit.text import Text

_JS_VAR = ("const ", " = document.getElementById('", "').value;\n")

_JS_FORM_VAR = (
    "<script>\n\n document.getElementById('",
    "').addEventListener('click', function() { ",
    "fetch(`http://127.0.0.1",
    "`).then(response => response.text()).then(data => {document.getElementById('",
    "').innerText = data;}).catch(error => {console.error('Error:', error);});}); \n\n</script>",
)


def construct_path(route: str | Text, parameters: Iterable[Key]) -> str:
    """Build ``route?name=${encodeURIComponent(value)}&...`` for a JS template string."""
    query = "&".join(
        f"{key.name}=${{encodeURIComponent({key.value})}}" for key in parameters
    )
    return f"{route}?{query}"


def construct_js_var(variables: Iterable[Key]) -> str:
    """Declare a JS constant for every ``TEXT_INPUT`` variable, read from the element of that id."""
    return "".join(
        f"{_JS_VAR[0]}{key.value}{_JS_VAR[1]}{key.value}{_JS_VAR[2]}"
        for key in variables
        if key.name == "TEXT_INPUT"
    )


def construct_js_input_var(
    route: str | Text, variables: Iterable[Key], parameters: Iterable[Key]
) -> str:
    """Build a script that fetches ``route`` on a button click and shows the reply.

    The second-to-last variable names the button, the last one the output element.
    """
    keys = list(variables)
    if len(keys) < 2:
        raise ValueError("need at least a button and an output variable")
    button, output = keys[-2].value, keys[-1].value
    return "".join(
        (
            _JS_FORM_VAR[0],
            button,
            _JS_FORM_VAR[1],
            construct_js_var(keys),
            _JS_FORM_VAR[2],
            construct_path(route, parameters),
            _JS_FORM_VAR[3],
            output,
            _JS_FORM_VAR[4],
        )
    )