"""
Plugin system for the Sui Agent.

This package provides plugin management, tool registration, and plugin discovery
mechanisms that extend the pipeline with protocol integrations.
"""
