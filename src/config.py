#!/usr/bin/env python3
"""
Action inputs and workflow context
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from constants import (
    COMMENT_MODES,
    DEFAULT_COMMENT_MODE,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_MAX_LOG_LINES,
)
from errors import ConfigError
from models import RunContext
from prompt_renderer import validate_template


@dataclass(frozen=True)
class ActionConfig:
    openrouter_api_key: str
    model: str
    prompt_template: str
    max_log_lines: int
    github_token: str
    comment_mode: str
    run_context: RunContext
    api_url: str = DEFAULT_GITHUB_API_URL
    server_url: Optional[str] = None

    def __repr__(self) -> str:
        # keep credentials out of tracebacks and debug prints
        return (
            f"ActionConfig(model={self.model!r}, max_log_lines={self.max_log_lines}, "
            f"comment_mode={self.comment_mode!r}, run_context={self.run_context!r})"
        )


def get_input(name: str, required: bool = False, default: str = "", env: Optional[Mapping[str, str]] = None) -> str:
    """Read an action input the way the runner exposes it (INPUT_<NAME>)"""
    env = os.environ if env is None else env
    key = "INPUT_" + name.upper().replace(" ", "_")
    value = (env.get(key) or "").strip()
    if not value:
        if required:
            raise ConfigError(f"Missing required input: {name}")
        return default
    return value


def parse_max_log_lines(raw: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigError("max_log_lines must be a positive integer.") from None
    if value <= 0:
        raise ConfigError("max_log_lines must be a positive integer.")
    return value


def resolve_run_context(env: Optional[Mapping[str, str]] = None) -> RunContext:
    """Build the run context from the variables GitHub sets for every workflow run"""
    env = os.environ if env is None else env
    repository = (env.get("GITHUB_REPOSITORY") or "").strip()
    run_id = (env.get("GITHUB_RUN_ID") or "").strip()
    workflow_name = (env.get("GITHUB_WORKFLOW") or "").strip()

    if not repository or not run_id:
        raise ConfigError(
            "Repository or run id is missing; ensure this action runs inside a GitHub Actions workflow."
        )
    if not workflow_name:
        raise ConfigError("GITHUB_WORKFLOW is not set; ensure this action runs inside a GitHub Actions workflow.")

    owner, _, repo = repository.partition("/")
    if not owner or not repo or "/" in repo:
        raise ConfigError(f"GITHUB_REPOSITORY must look like owner/repo, got {repository!r}")

    return RunContext(owner=owner, repo=repo, run_id=run_id, workflow_name=workflow_name)


def load_config(env: Optional[Mapping[str, str]] = None) -> ActionConfig:
    """Validate every input before anything touches the network"""
    env = os.environ if env is None else env

    openrouter_api_key = get_input("openrouter_api_key", required=True, env=env)
    model = get_input("model", required=True, env=env)
    prompt_template = get_input("prompt_template", required=True, env=env)
    max_log_lines = parse_max_log_lines(
        get_input("max_log_lines", default=str(DEFAULT_MAX_LOG_LINES), env=env)
    )

    comment_mode = get_input("comment_mode", default=DEFAULT_COMMENT_MODE, env=env).lower()
    if comment_mode not in COMMENT_MODES:
        raise ConfigError(f"comment_mode must be one of: {', '.join(COMMENT_MODES)}")

    github_token = get_input("github_token", env=env) or (env.get("GITHUB_TOKEN") or "").strip()
    if not github_token:
        raise ConfigError("GITHUB_TOKEN is required to call GitHub API.")

    validate_template(prompt_template)
    run_context = resolve_run_context(env)

    return ActionConfig(
        openrouter_api_key=openrouter_api_key,
        model=model,
        prompt_template=prompt_template,
        max_log_lines=max_log_lines,
        github_token=github_token,
        comment_mode=comment_mode,
        run_context=run_context,
        api_url=(env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL).rstrip("/"),
        server_url=(env.get("GITHUB_SERVER_URL") or None),
    )
