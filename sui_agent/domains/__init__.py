"""
Domain models for the Sui Agent system.

This package contains the core domain models that represent tools,
tool selections and the structured answers produced by the pipeline.
"""

from sui_agent.domains.tools import *
from sui_agent.domains.pipeline import *
from sui_agent.domains.errors import *
