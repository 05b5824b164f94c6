#!/usr/bin/env python3
"""
Prompt template validation and rendering
"""

import re
from typing import Mapping

from constants import LOG_PLACEHOLDER
from errors import ConfigError


def validate_template(template: str) -> None:
    """Raise ConfigError unless the template has somewhere to put the log"""
    if not template or LOG_PLACEHOLDER not in template:
        raise ConfigError(f"prompt_template must include {LOG_PLACEHOLDER} placeholder.")


def render_template(template: str, values: Mapping[str, str]) -> str:
    """Replace ``{{KEY}}`` tokens for every key in ``values``.

    The template is scanned once, so text coming from a value (a log line
    containing ``{{JOB_NAME}}`` for instance) is never substituted again.
    Tokens with no matching key are left as they are.
    """
    if not values:
        return template

    pattern = re.compile(r"\{\{(" + "|".join(re.escape(key) for key in values) + r")\}\}")
    return pattern.sub(lambda match: str(values[match.group(1)]), template)
