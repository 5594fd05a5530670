"""
Abstract interfaces for the Sui Agent system.

These interfaces define the contracts that concrete implementations
must adhere to, following the Dependency Inversion Principle.

This package contains:
- Provider interfaces for external service adapters
- Plugin interfaces for tools and tool registrars
- Service interfaces for the pipeline stages
"""
