#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
config.py

Configuration constants and defaults for the IBM Cost Architect tool.

Everything here is a plain module-level constant, optionally overridden
through an IBMCOST_* environment variable, so the CLI and tests can swap
values without touching code.
"""

import os

# ---------------------------------------------------------------------
# Defaults: vendor / region
# ---------------------------------------------------------------------
# DEFAULT_REGION:
# - Used when a Terraform resource carries no region attribute and the CLI
#   did not pass --region.
# - Example value: "us-south"
DEFAULT_REGION = os.getenv("IBMCOST_DEFAULT_REGION", "us-south")

# ---------------------------------------------------------------------
# Resource type definitions
# ---------------------------------------------------------------------
# DEFINITIONS_DIR:
# - Folder holding the YAML/JSON resource-type definitions.
# - Empty means "use the definitions bundled with the package".
DEFINITIONS_DIR = os.getenv("IBMCOST_DEFINITIONS_DIR", "").strip()

# ---------------------------------------------------------------------
# Usage files
# ---------------------------------------------------------------------
# USAGE_FILE_VERSION:
# - Version written into generated usage files and the highest version
#   the loader accepts.
USAGE_FILE_VERSION = "0.1"

# ---------------------------------------------------------------------
# Logging / run artifacts
# ---------------------------------------------------------------------
# DEFAULT_LOG_LEVEL:
# - CLI default for --log-level.
DEFAULT_LOG_LEVEL = os.getenv("IBMCOST_LOG_LEVEL", "INFO")

# RUNS_DIR:
# - Root folder for per-run artifacts (console.log, trace.jsonl).
RUNS_DIR = os.getenv("IBMCOST_RUNS_DIR", "runs")

# TRACE_ENABLED:
# - JSONL run trace is on unless IBMCOST_TRACE is 0/false/no.
TRACE_ENABLED = os.getenv("IBMCOST_TRACE", "1").strip().lower() not in {"0", "false", "no"}
