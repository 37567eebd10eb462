"""Pipeline orchestration for edition runs."""

from .orchestrator import Orchestrator

__all__ = ["Orchestrator"]
