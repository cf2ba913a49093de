"""
User-agent parsing helpers for the Browser Gate.
"""

from .parser import parse_user_agent

__all__ = ["parse_user_agent"]
