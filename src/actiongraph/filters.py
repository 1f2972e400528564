"""CEL action filters: decide which actions a dump includes.

An action filter is a CEL expression evaluated once per action. The action is
exposed through these variables:

- ``mnemonic``: action mnemonic (string)
- ``label``: owning target label, e.g. ``//java/app:lib`` (string)
- ``configuration``: configuration mnemonic, ``""`` when unset (string)
- ``inputs``: exec paths of all inputs, flattened (list of strings)
- ``outputs``: exec paths of the outputs (list of strings)
- ``aspects``: names of the aspects that created the action (list of strings)

Example: ``mnemonic == "Javac" && outputs.exists(p, p.endsWith(".jar"))``
"""

from typing import Any

import celpy
from celpy import celtypes

from actiongraph.domain import ActionSpec

VARIABLES = ("mnemonic", "label", "configuration", "inputs", "outputs", "aspects")


def action_variables(action: ActionSpec) -> dict[str, Any]:
    """Return the filter variables of an action as plain Python values."""
    return {
        "mnemonic": action.mnemonic,
        "label": str(action.owner.label),
        "configuration": action.configuration.mnemonic if action.configuration else "",
        "inputs": [artifact.exec_path for artifact in action.inputs.to_list()],
        "outputs": [artifact.exec_path for artifact in action.outputs],
        "aspects": [aspect.name for aspect in action.aspects],
    }


class ActionFilter:
    """A compiled CEL predicate over actions."""

    def __init__(self, expression: str) -> None:
        """Compile a filter expression.

        Args:
            expression: CEL expression over the variables listed in this
                module's docstring. Must evaluate to a boolean.

        Raises:
            ValueError: If the expression is empty or does not compile.
        """
        if not expression or not expression.strip():
            raise ValueError("Action filter expression cannot be empty")
        self.expression = expression

        env = celpy.Environment()
        try:
            ast = env.compile(expression)
            self._program = env.program(ast)
        except Exception as e:
            raise ValueError(
                f"Failed to compile action filter '{expression}': {e}"
            ) from e

    def matches(self, action: ActionSpec) -> bool:
        """Evaluate the filter for one action.

        Raises:
            ValueError: If evaluation fails or the result is not a boolean.
        """
        activation = {
            name: celpy.json_to_cel(value)
            for name, value in action_variables(action).items()
        }
        try:
            result = self._program.evaluate(activation)
        except Exception as e:
            raise ValueError(
                f"Failed to evaluate action filter '{self.expression}' for "
                f"action '{action.action_key}': {e}"
            ) from e

        if isinstance(result, celpy.CELEvalError):
            raise ValueError(
                f"Failed to evaluate action filter '{self.expression}' for "
                f"action '{action.action_key}': {result}"
            )
        if not isinstance(result, celtypes.BoolType):
            raise ValueError(
                f"Action filter '{self.expression}' returned "
                f"{type(result).__name__}, expected a boolean"
            )
        return bool(result)

    def __repr__(self) -> str:
        return f"ActionFilter({self.expression!r})"
