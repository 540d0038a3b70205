"""
Insurance application intake.

This package contains the intake-specific implementations:
- wizard: Multi-step application form state and validation
- services: Captcha, login directory, application storage backends
- pipelines: Stateless orchestration used by the routers and the wizard
- routers/schemas: REST surface
- config: Application settings

Uses generic infrastructure from the common/ package.
"""

from app.config import settings

__all__ = ["settings"]
