"""Command validators.

A validator receives the command node of the parse tree and returns a
diagnostic message, or None when the invocation is valid. Validators never
raise and have no side effects.
"""

from __future__ import annotations

import click

from .parsing import CommandResult

WRONG_OPTION_POSITION = (
    "Invalid command syntax: option '{0}' should be used after '{1}'."
)
WRONG_ARGUMENT_POSITION = (
    "Invalid command syntax: argument '{0}' should be used after '{1}'."
)


def validate_option_usage_in_parent(
    command_result: CommandResult, option: click.Option
) -> str | None:
    """Reject ``option`` when it was given to the parent command.

    Args:
        command_result: Node of the command being validated
        option: Option instance registered on the parent command

    Returns:
        Diagnostic message or None
    """
    parent = command_result.parent
    if parent is None or parent.find(option) is None:
        return None
    return WRONG_OPTION_POSITION.format(option.opts[0], command_result.name)


def validate_argument_usage_in_parent(
    command_result: CommandResult, argument: click.Argument
) -> str | None:
    """Reject ``argument`` when it was given to the parent command.

    Args:
        command_result: Node of the command being validated
        argument: Argument instance registered on the parent command

    Returns:
        Diagnostic message or None
    """
    parent = command_result.parent
    argument_result = parent.find(argument) if parent is not None else None
    if argument_result is None or not argument_result.tokens:
        return None
    return WRONG_ARGUMENT_POSITION.format(
        argument_result.tokens[0], command_result.name
    )


def validate_parent_argument_not_used(
    command_result: CommandResult,
    name_argument: click.Argument,
    parent_argument: click.Argument,
) -> str | None:
    """Reject a name given both to the command and to its parent.

    Args:
        command_result: Node of the command being validated
        name_argument: The command's own name argument
        parent_argument: The parent's short name argument

    Returns:
        Diagnostic message naming the parent's token, or None
    """
    if command_result.find(name_argument) is None:
        return None
    return validate_argument_usage_in_parent(command_result, parent_argument)
