"""Exception types raised by the model machinery.

All of these indicate a structural or configuration problem (bad snapshot,
model/registry definition bug, misuse of a control name). None are transient,
so callers should surface the message rather than retry.
"""


class QModelError(Exception):
    """Base exception for qmodel errors."""

    pass


class SerializationError(QModelError):
    """A model property cannot be represented in the snapshot format."""

    pass


class SchemaMismatchError(QModelError):
    """A snapshot is missing its version tag."""

    pass


class UnknownUnitMapping(QModelError, KeyError):
    """No unit mapping registered for a (protocol, label) pair."""

    def __init__(self, protocol_name: str, label: str, model_name: str = ""):
        self.protocol_name = protocol_name
        self.label = label
        self.model_name = model_name
        super().__init__(protocol_name, label)

    def __str__(self):
        where = f" for model {self.model_name}" if self.model_name else ""
        return (
            f"No unit mapping registered{where}: "
            f"protocol '{self.protocol_name}', field '{self.label}'"
        )


class ControlError(QModelError):
    """Base exception for misuse of the control descriptor list."""

    pass


class UnknownControl(ControlError, KeyError):
    """Control name does not exist in the descriptor list."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown control: '{self.name}'"


class NotAPanel(ControlError):
    """Control name was used as a panel but does not start a panel."""

    pass


class NotACheckbox(ControlError):
    """Control name was used as a checkbox but is not one."""

    pass


class InvalidAssignment(QModelError, ValueError):
    """Value does not match the kind of the control it is assigned to."""

    pass
