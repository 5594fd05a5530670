"""
Service implementations for the Sui Agent system.

These services implement the pipeline stage interfaces defined in
sui_agent.interfaces.services.
"""

from sui_agent.services.aggregator import *
from sui_agent.services.decomposer import *
from sui_agent.services.error_handler import *
from sui_agent.services.executor import *
from sui_agent.services.pipeline import *
from sui_agent.services.selector import *
