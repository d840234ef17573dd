# agents/advisory/__init__.py
"""
Advisory agent package
"""

from .agent import AdvisoryAgent
from .models import AdvisoryRequest, AdvisoryResponse

__all__ = ["AdvisoryAgent", "AdvisoryRequest", "AdvisoryResponse"]
