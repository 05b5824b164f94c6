#!/usr/bin/env python3
"""
CI Triage Helper - GitHub Action that asks an LLM why a workflow run failed
"""

import os
import sys
import uuid
from typing import Optional

from config import ActionConfig, load_config
from constants import (
    CI_FAILURE_ANALYSIS_MAIN_TITLE,
    CI_TRIAGE_COMMENT_MARKER,
    CI_TRIAGE_TRAILER,
    EMPTY_LOG_TEXT,
    UNKNOWN_STEP_NAME,
)
from errors import BackendError, ConfigError, UpstreamError
from github_client import GitHubClient
from log_trimmer import trim_log
from openrouter_client import OpenRouterClient
from prompt_renderer import render_template


def fallback_diagnosis(error: Exception) -> str:
    """Text shown in place of the model answer when OpenRouter could not be used"""
    return (
        f"❌ Failed to analyze the error with AI: {error}\n\n"
        "**Manual Review Needed:** please check the job log for details."
    )


def format_report(workflow_name: str, job_name: str, step_name: str, diagnosis: str) -> str:
    return "\n".join([
        CI_TRIAGE_COMMENT_MARKER,
        f"{CI_FAILURE_ANALYSIS_MAIN_TITLE} (workflow: {workflow_name}, job: {job_name}, step: {step_name})",
        diagnosis,
        CI_TRIAGE_TRAILER,
    ])


def write_output(key: str, value: str) -> None:
    """Append a multi-line step output to GITHUB_OUTPUT, if the runner gave us one"""
    github_output = os.environ.get("GITHUB_OUTPUT", "")
    if not github_output:
        return
    # fresh per call so the value can never close the block early
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(github_output, "a", encoding="utf-8") as f:
        f.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")


class CITriage:
    """Main class for CI Triage functionality"""

    def __init__(self, config: Optional[ActionConfig] = None):
        # Raises ConfigError before any client exists
        self.config = config or load_config()
        self.run_context = self.config.run_context

        referer = None
        if self.config.server_url:
            referer = f"{self.config.server_url.rstrip('/')}/{self.run_context.repository}"

        self.github = GitHubClient(self.config.github_token, self.run_context, self.config.api_url)
        self.openrouter = OpenRouterClient(
            self.config.openrouter_api_key,
            self.config.model,
            title=self.run_context.repository,
            referer=referer,
        )

    def run(self) -> Optional[str]:
        """Triage the run; returns the emitted report, or None when nothing failed"""
        ctx = self.run_context
        print(f"🔍 Starting CI failure analysis for workflow: {ctx.workflow_name} (#{ctx.run_id})")

        jobs = self.github.list_jobs()
        if not jobs:
            print("ℹ️  No jobs found for this workflow run.")
            return None

        failure = self.github.locate_failure(jobs)
        if failure is None:
            print("✅ No failed jobs detected. Exiting.")
            return None

        job = failure.job
        step_name = failure.step.name if failure.step else UNKNOWN_STEP_NAME
        if failure.step is None:
            print(f"⚠️  No failed step found in job '{job.name}', analyzing the whole job")

        logs = self.github.fetch_job_log(job)
        trimmed = trim_log(logs, self.config.max_log_lines)

        print(f"🚨 Analyzing job '{job.name}' (id: {job.id}), step '{step_name}'.")
        print(f"📋 Original log lines: {trimmed.original_line_count}; included lines: {trimmed.retained_line_count}")

        prompt = render_template(self.config.prompt_template, {
            "LOG": trimmed.tail_text or EMPTY_LOG_TEXT,
            "WORKFLOW_NAME": ctx.workflow_name,
            "JOB_NAME": job.name,
            "STEP_NAME": step_name,
        })

        try:
            diagnosis = self.openrouter.diagnose(prompt)
        except BackendError as e:
            print(f"❌ OpenRouter request failed: {e}", file=sys.stderr)
            diagnosis = fallback_diagnosis(e)

        report = format_report(ctx.workflow_name, job.name, step_name, diagnosis)
        print("🤖 AI analysis:")
        print(report)
        write_output("analysis", diagnosis)

        self._post_comment(report)
        print("✅ Analysis complete!")
        return report

    def _post_comment(self, report: str) -> None:
        if self.config.comment_mode == "off":
            return

        pr = self.github.get_pull_request()
        if not pr:
            print("ℹ️  No pull request found for this run - skipping comment")
            return

        print(f"📝 Found PR #{pr.number}")
        self.github.post_or_update_comment(pr, report, self.config.comment_mode)


def main():
    """Entry point for CI Triage"""
    try:
        CITriage().run()
    except (ConfigError, UpstreamError) as e:
        print(f"❌ CI triage failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
