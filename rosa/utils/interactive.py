import ipaddress
import re
from collections.abc import Callable
from dataclasses import (
    dataclass,
    field,
    replace,
)
from typing import Any

from rich.console import Console
from rich.prompt import (
    Confirm,
    Prompt,
)
from rich.text import Text

HELP = "?"
TRUE_VALUES = {"y", "yes", "true"}
FALSE_VALUES = {"n", "no", "false"}

Validator = Callable[[str], None]

console = Console(highlight=False)


class InteractiveInputError(Exception):
    pass


@dataclass
class Input:
    question: str
    help: str = ""
    default: Any = None
    required: bool = False
    options: list[str] = field(default_factory=list)
    validators: list[Validator] = field(default_factory=list)


def regex_validator(pattern: str) -> Validator:
    def validate(value: str) -> None:
        try:
            matched = re.search(pattern, value)
        except re.error:
            matched = None
        if not matched:
            raise InteractiveInputError(f"Expected {value} to match /{pattern}/")

    return validate


def _read(question: str) -> str:
    try:
        return Prompt.ask(
            Text(question), default="", show_default=False, console=console
        )
    except (EOFError, KeyboardInterrupt):
        raise InteractiveInputError("No answer given") from None


def _prompt_text(question: str, default: str, options: list[str]) -> str:
    text = f"? {question}"
    if options:
        text += f" ({', '.join(options)})"
    if default:
        text += f" [{default}]"
    return f"{text}:"


def get_input(input: Input) -> str:
    """
    Asks the question until something other than the help request is
    answered. An empty answer selects the default.
    """
    default = "" if input.default is None else str(input.default)
    while True:
        answer = _read(_prompt_text(input.question, default, input.options)).strip()
        if answer != HELP:
            break
        console.print(input.help or "No help available")
    if not answer:
        answer = default
    if not answer and input.required:
        raise InteractiveInputError(f"A value for '{input.question}' is required")
    return answer


def get_string(input: Input) -> str:
    answer = get_input(input)
    if answer:
        for validator in input.validators:
            validator(answer)
    return answer


def get_int(input: Input) -> int:
    answer = get_string(input)
    if not answer:
        return 0
    try:
        return int(answer)
    except ValueError:
        raise InteractiveInputError(f"'{answer}' is not a valid number") from None


def get_bool(input: Input) -> bool:
    if isinstance(input.default, bool):
        input = replace(input, default="yes" if input.default else "no")
    answer = get_input(input).lower()
    if answer in TRUE_VALUES:
        return True
    if answer in FALSE_VALUES or not answer:
        return False
    raise InteractiveInputError(f"'{answer}' is not a valid yes/no answer")


def get_option(input: Input) -> str:
    answer = get_string(input)
    if answer and answer not in input.options:
        raise InteractiveInputError(
            f"'{answer}' is not a valid option, expected one of: "
            f"{', '.join(input.options)}"
        )
    return answer


def get_ipnet(
    input: Input,
) -> ipaddress.IPv4Network | ipaddress.IPv6Network | None:
    answer = get_string(input)
    if not answer:
        return None
    try:
        return ipaddress.ip_network(answer, strict=False)
    except ValueError as e:
        raise InteractiveInputError(f"'{answer}' is not a valid CIDR: {e}") from None


def confirm(action: str, yes: bool = False) -> bool:
    if yes:
        return True
    try:
        return Confirm.ask(
            Text(f"? Are you sure you want to {action}?"),
            default=False,
            console=console,
        )
    except (EOFError, KeyboardInterrupt):
        return False
