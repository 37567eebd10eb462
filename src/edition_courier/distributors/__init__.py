"""Distributors for delivering merged editions."""

from .slack_distributor import SlackDistributor

__all__ = ["SlackDistributor"]
