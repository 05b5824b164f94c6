#!/usr/bin/env python3
"""
Constants for CI Triage Helper
"""

# Comment marker for the report (first line, used to find our PR comment again)
CI_TRIAGE_COMMENT_MARKER = "<!-- ci-triage-helper -->"

# Report header title
CI_FAILURE_ANALYSIS_MAIN_TITLE = "🚨 **CI Failure Analysis**"

# Last line of every report
CI_TRIAGE_TRAILER = "_Generated automatically after workflow failure._"

DEFAULT_GITHUB_API_URL = "https://api.github.com"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
USER_AGENT = "ci-triage-helper"

# GitHub returns at most 100 jobs per page
JOBS_PAGE_SIZE = 100

DEFAULT_MAX_LOG_LINES = 500

LOG_PLACEHOLDER = "{{LOG}}"
UNKNOWN_STEP_NAME = "Unknown step"
EMPTY_LOG_TEXT = "Log is empty."

COMMENT_MODES = ("update-existing", "create-new", "off")
DEFAULT_COMMENT_MODE = "update-existing"
