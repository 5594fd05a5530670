"""
Tools for the Sui Agent system.

This package contains the base AutoTool class that protocol integrations
extend to expose their capabilities.
"""

from sui_agent.plugins.tools.auto_tool import *
