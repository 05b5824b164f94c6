#!/usr/bin/env python3
"""
GitHub client utilities
"""

import json
import os

from typing import Iterator, List, Optional
from github import Auth, Github, GithubException
from github.PullRequest import PullRequest
import requests
from models import FailureLocation, Job, RunContext, Step
from constants import CI_TRIAGE_COMMENT_MARKER, DEFAULT_GITHUB_API_URL, JOBS_PAGE_SIZE, USER_AGENT
from errors import UpstreamListingError, UpstreamLogError


def pick_failed_job(jobs: List[Job]) -> Optional[Job]:
    """First job, in listing order, that ended in a failure conclusion"""
    return next((job for job in jobs if job.conclusion.is_failure), None)


def pick_failed_step(job: Job) -> Optional[Step]:
    """First step, in execution order, that ended in a failure conclusion"""
    return next((step for step in job.steps if step.conclusion.is_failure), None)


class GitHubClient:
    def __init__(self, github_token: str, run_context: RunContext, api_url: str = DEFAULT_GITHUB_API_URL):
        self.github_token = github_token
        self.run_context = run_context
        self.api_url = api_url.rstrip("/")
        self.github = Github(auth=Auth.Token(github_token), base_url=self.api_url)
        self.event_name = os.getenv("GITHUB_EVENT_NAME")
        self.sha = os.getenv("GITHUB_SHA")

    def _headers(self, accept: str = "application/vnd.github+json") -> dict:
        return {
            "Accept": accept,
            "Authorization": f"Bearer {self.github_token}",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _repo_url(self) -> str:
        return f"{self.api_url}/repos/{self.run_context.owner}/{self.run_context.repo}"

    def _get(self, url: str, error_cls, **kwargs) -> requests.Response:
        try:
            response = requests.get(url, timeout=30, **kwargs)
        except requests.RequestException as e:
            raise error_cls(None, message=f"{error_cls.service} request failed: {type(e).__name__}: {e}") from None
        if not response.ok:
            raise error_cls(response.status_code, response.reason, response.text)
        return response

    def iter_job_pages(self) -> Iterator[List[dict]]:
        """Yield the run's jobs one page at a time, stopping after a short page.

        Every call starts again from page 1.
        """
        jobs_url = f"{self._repo_url()}/actions/runs/{self.run_context.run_id}/jobs"
        page = 1
        while True:
            response = self._get(
                jobs_url,
                UpstreamListingError,
                headers=self._headers(),
                params={"per_page": JOBS_PAGE_SIZE, "page": page},
            )

            try:
                page_jobs = response.json().get("jobs") or []
            except (ValueError, AttributeError):
                raise UpstreamListingError(
                    response.status_code, response.reason, message="GitHub job listing returned an unexpected payload."
                ) from None
            yield page_jobs
            if len(page_jobs) < JOBS_PAGE_SIZE:
                return
            page += 1

    def list_jobs(self) -> List[Job]:
        """All jobs of the run in listing order"""
        jobs = []
        for page_jobs in self.iter_job_pages():
            jobs.extend(Job.from_api(job) for job in page_jobs)
        print(f"📋 Found {len(jobs)} job(s) in run #{self.run_context.run_id}")
        return jobs

    def locate_failure(self, jobs: Optional[List[Job]] = None) -> Optional[FailureLocation]:
        """Find the failed job and step of the run, None when nothing failed"""
        if jobs is None:
            jobs = self.list_jobs()
        job = pick_failed_job(jobs)
        if job is None:
            return None
        return FailureLocation(job=job, step=pick_failed_step(job))

    def fetch_job_log(self, job: Job) -> str:
        """Download the raw log text of a job"""
        url = f"{self._repo_url()}/actions/jobs/{job.id}/logs"
        response = self._get(url, UpstreamLogError, headers=self._headers(accept="text/plain"))
        return response.text

    def get_pull_request(self) -> Optional[PullRequest]:
        """Get the pull request associated with this run"""
        try:
            repo = self.github.get_repo(self.run_context.repository)

            # For pull_request events, get PR from event
            if self.event_name in ("pull_request", "pull_request_target"):
                event_path = os.getenv("GITHUB_EVENT_PATH")
                if event_path and os.path.exists(event_path):
                    with open(event_path, "r") as f:
                        event_data = json.load(f)
                    pr_number = event_data.get("pull_request", {}).get("number")
                    if pr_number:
                        return repo.get_pull(pr_number)

            # For other events, search for PRs with this commit
            if not self.sha:
                return None
            for pr in repo.get_pulls(state="open"):
                if pr.head.sha == self.sha:
                    return pr

            return None

        except (GithubException, OSError, ValueError) as e:
            print(f"⚠️  Error getting pull request: {e}")
            return None

    def post_or_update_comment(self, pr: PullRequest, body: str, comment_mode: str = "update-existing") -> None:
        """Post the report on the pull request, replacing our previous one if asked to"""
        if CI_TRIAGE_COMMENT_MARKER not in body:
            body = f"{CI_TRIAGE_COMMENT_MARKER}\n{body}"

        try:
            if comment_mode == "update-existing":
                for comment in pr.get_issue_comments():
                    if comment.body and CI_TRIAGE_COMMENT_MARKER in comment.body:
                        comment.edit(body)
                        print(f"💬 Updated existing comment on PR #{pr.number}")
                        return

            pr.create_issue_comment(body)
            print(f"💬 Created new comment on PR #{pr.number}")

        except GithubException as e:
            print(f"⚠️  Error posting comment: {e}")
