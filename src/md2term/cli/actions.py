"""Custom argparse Action classes for the md2term CLI.

Every option accepts a default from the environment: ``--hr-width`` reads
``MD2TERM_HR_WIDTH``, ``--symbol`` reads ``MD2TERM_SYMBOL`` and so on.
Command-line values always win over environment values.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os

from md2term.constants import ENV_VAR_PREFIX

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")


def env_var_name(dest: str) -> str:
    """Return the environment variable consulted for an argument destination.

    Examples
    --------
        >>> env_var_name("hr_width")
        'MD2TERM_HR_WIDTH'

    """
    return f"{ENV_VAR_PREFIX}{dest.upper().replace('-', '_')}"


def _dest_from_option_strings(option_strings) -> str | None:
    for option in option_strings:
        if option.startswith("--"):
            return option[2:].replace("-", "_")
    for option in option_strings:
        if option.startswith("-"):
            return option[1:]
    return None


class EnvironmentAwareAction(argparse.Action):
    """Store action that takes its default from ``MD2TERM_<DEST>`` when set.

    The environment value is passed through argparse like any string
    default, so ``type`` conversion still applies to it.
    """

    def __init__(self, option_strings, dest=None, **kwargs):
        env_dest = kwargs.pop("env_dest", None) or dest or _dest_from_option_strings(option_strings)
        if env_dest:
            env_key = env_var_name(env_dest)
            env_value = os.environ.get(env_key)
            if env_value is not None:
                choices = kwargs.get("choices")
                if choices is not None and env_value not in choices:
                    logger.warning(f"Ignoring invalid environment variable {env_key}={env_value}")
                else:
                    kwargs["default"] = env_value

        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """Standard action processing."""
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Boolean flag that takes its default from ``MD2TERM_<DEST>`` when set."""

    def __init__(self, option_strings, dest=None, **kwargs):
        env_dest = kwargs.pop("env_dest", None) or dest or _dest_from_option_strings(option_strings)
        if env_dest:
            env_value = os.environ.get(env_var_name(env_dest))
            if env_value is not None:
                kwargs["default"] = env_value.lower() in TRUE_VALUES

        super().__init__(option_strings, dest, **kwargs)


def create_env_aware_argument(parser, *args, **kwargs):
    """Add an argument with automatic environment variable support.

    ``store_true`` flags become ``EnvironmentAwareBooleanAction``, plain
    store arguments become ``EnvironmentAwareAction``.
    """
    action = kwargs.get("action", "store")

    if action == "store_true":
        kwargs["action"] = EnvironmentAwareBooleanAction
    elif action in ("store", None):
        kwargs["action"] = EnvironmentAwareAction

    return parser.add_argument(*args, **kwargs)
