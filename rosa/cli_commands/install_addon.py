from dataclasses import dataclass

from rosa.utils import interactive
from rosa.utils.interactive import (
    Input,
    InteractiveInputError,
)
from rosa.utils.ocm.base import (
    OCMAddOnParameter,
    OCMAddOnParameterValue,
)


class AddonParameterError(Exception):
    pass


@dataclass
class InstallAddonCommandData:
    addon_id: str
    parameters: list[OCMAddOnParameter]


class InstallAddonCommand:
    """
    Asks for the value of each add-on parameter according to its value type
    and checks it against the validation expression of the parameter.
    """

    def __init__(self, command_data: InstallAddonCommandData):
        self._command_data = command_data

    @staticmethod
    def _ask(param: OCMAddOnParameter) -> str:
        input = Input(
            question=param.name or param.id,
            help=param.description,
            default=param.default_value or None,
            required=param.required,
        )
        match param.value_type:
            case "boolean":
                return "true" if interactive.get_bool(input) else "false"
            case "cidr":
                network = interactive.get_ipnet(input)
                return str(network) if network else ""
            case "number":
                return str(interactive.get_int(input))
            case _:
                return interactive.get_string(input)

    def execute(self) -> list[OCMAddOnParameterValue]:
        values: list[OCMAddOnParameterValue] = []
        for param in self._command_data.parameters:
            try:
                value = self._ask(param)
            except InteractiveInputError as e:
                raise AddonParameterError(
                    f"Expected a valid value for '{param.id}': {e}"
                ) from None
            if param.validation:
                try:
                    interactive.regex_validator(param.validation)(value)
                except InteractiveInputError as e:
                    raise AddonParameterError(str(e)) from None
            values.append(OCMAddOnParameterValue(id=param.id, value=value))
        return values
